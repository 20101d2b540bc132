"""HTTP proxy for translation and chat."""
