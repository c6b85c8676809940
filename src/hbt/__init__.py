"""hbt - terminal habit tracker."""

__version__ = "0.1.0"
