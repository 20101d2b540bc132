"""
Infrastructure layer.

Backends are imported from their own modules so that loading the
interfaces never pulls in native audio or speech libraries.
"""
