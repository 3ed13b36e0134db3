"""clip-scribe -- drop an audio clip, get an on-device English transcript."""

__version__ = '0.1.0'
