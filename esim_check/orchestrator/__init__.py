"""Request orchestration and API schemas."""
