"""PubDictionaries adapter exposing the VSM dictionary query contract."""

__version__ = "0.1.0"
