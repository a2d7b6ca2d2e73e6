"""Small building blocks: identifiers, logging, caches, state machines, encoders, rate limiting, markdown and steganography."""

__version__ = "0.1.0"