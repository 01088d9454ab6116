"""Domain and I/O models for the tracker."""
