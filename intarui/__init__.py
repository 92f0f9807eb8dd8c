"""State, theming, styled text, Markdown rendering and layout for a VM scenario terminal interface."""

__version__ = "0.1.0"