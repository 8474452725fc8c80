"""mentionbox: @mention query resolution for editable text buffers."""

__version__ = "0.1.0"
