"""yake — Yet Another ToolKit for Go repositories."""

__version__ = "0.1.0"
