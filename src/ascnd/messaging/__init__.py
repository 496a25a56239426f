"""Wire encoding for Ascnd RPC messages."""

from ascnd.messaging.encoder import DecodeError, decode, decoder_for, encode

__all__ = [
    "DecodeError",
    "decode",
    "decoder_for",
    "encode",
]
