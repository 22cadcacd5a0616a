'''Encoder and incremental streaming decoder for netstrings:
<length>:<payload>,

See http://cr.yp.to/proto/netstrings.txt for the format.
'''

from .errors import (DecoderError, IllegalSizeField, SizeFieldTooWide,
                     SizeExceedsLimit, MissingPayloadTerminator,
                     UnexpectedEndOfStream, TrailingData, InvalidMessage)
from .netstring import encode, decode, ChunkSource, Decoder, Writer
from .aio import AsyncDecoder
from .message import write_message, read_messages

# vim: set ts=8 sts=4 sw=4 ai et :
