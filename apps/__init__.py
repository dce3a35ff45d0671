"""Hotel booking service Django apps."""
