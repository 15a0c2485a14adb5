from typing import Awaitable, Callable
from .buffer import BufferArena, INPUT_BUFFER_SIZE, OUTPUT_BUFFER_SIZE
from .decoder import StreamingFixedDecoder
from .source import ByteSource


DecodeFunc = Callable[[ByteSource], Awaitable[memoryview]]


class ConcurrentDecoder(StreamingFixedDecoder):
    '''
    a streaming decoder over its own private arena

    buffers are allocated once, here, and reused by every call. one owner may
    call it as often as it likes, decoders from separate constructions share
    nothing and can run at the same time without locking.
    '''
    def __init__(self, input_size: int = INPUT_BUFFER_SIZE, output_size: int = OUTPUT_BUFFER_SIZE):
        super().__init__(BufferArena(input_size, output_size))

    @property
    def arena(self) -> BufferArena:
        return self._arena


def new_concurrent_decoder(input_size: int = INPUT_BUFFER_SIZE,
                           output_size: int = OUTPUT_BUFFER_SIZE) -> DecodeFunc:
    return ConcurrentDecoder(input_size, output_size).decode
