from .errors import DecodeError, FormatError, BufferOverflowError
from .source import ByteSource, BytesSource, stream_reader
from .buffer import BufferArena, FixedBuffer, DynamicBuffer
from .decoder import (
    Decoder,
    WholeInputDecoder,
    SharedBufferDecoder,
    StreamingFixedDecoder,
    StreamingDynamicDecoder,
)
from .factory import ConcurrentDecoder, new_concurrent_decoder
