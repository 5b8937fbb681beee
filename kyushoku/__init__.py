"""School lunch menu tools."""
