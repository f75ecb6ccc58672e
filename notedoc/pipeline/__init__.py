"""Upload lifecycle: state transitions and the orchestrator."""
