import logging
from .buffer import BufferArena, DynamicBuffer, INPUT_BUFFER_SIZE
from .digits import SPACE, Accumulator, parse_token, split_tokens
from .errors import DecodeError
from .source import ByteSource


class Decoder:
    '''
    reads space separated byte values from a source, e.g. "79 75" -> b"OK"

    OSError from the source propagates unchanged, malformed input raises
    FormatError. whatever was written before an error is undefined.
    '''
    async def decode(self, source: ByteSource) -> bytes | memoryview:
        try:
            return await self._decode(source)
        except DecodeError as e:
            logging.error(f'{self} failed: {e}')
            raise

    async def __call__(self, source: ByteSource) -> bytes | memoryview:
        return await self.decode(source)

    async def _decode(self, source: ByteSource) -> bytes | memoryview:
        raise NotImplementedError

    def __str__(self):
        return type(self).__name__


class WholeInputDecoder(Decoder):
    '''
    reads everything, splits it and parses token by token

    the output is a new bytes object owned by the caller. input of any length
    is accepted, at the price of holding the input, the token list and the
    output in memory together.
    '''
    def __init__(self, read_size: int = INPUT_BUFFER_SIZE):
        self._read_size = read_size

    async def _decode(self, source: ByteSource) -> bytes:
        chunks = []
        while True:
            chunk = await source.read(self._read_size)
            if not chunk:
                break
            chunks.append(chunk)

        output = bytearray()
        offset = 0
        for token in split_tokens(b''.join(chunks)):
            output.append(parse_token(token, offset))
            offset += len(token) + 1

        return bytes(output)


class SharedBufferDecoder(Decoder):
    '''
    parses from the shared input buffer into the shared output buffer

    only ONE read is made: the whole input has to fit the input buffer and
    has to arrive in that single read, anything after it is never seen. use
    StreamingFixedDecoder for sources that deliver in chunks.

    the returned view aliases the shared output buffer and is overwritten by
    the next call to any decoder on the same arena. not safe to call from
    more than one task at a time.
    '''
    def __init__(self, arena: BufferArena | None = None):
        self._arena = arena or BufferArena.shared()

    async def _decode(self, source: ByteSource) -> memoryview:
        arena = self._arena
        n = await arena.fill(source)
        if n == len(arena.input):
            logging.warning(f'input filled the {n} byte buffer, it may have been truncated')

        output = arena.output
        output.reset()

        offset = 0
        for token in split_tokens(arena.staged(n).tobytes()):
            output.append(parse_token(token, offset))
            offset += len(token) + 1

        return output.view()


class StreamingDecoder(Decoder):
    '''
    parses digits as the bytes arrive, without building token strings

    subclasses choose where the output goes through _output().
    '''
    def __init__(self, arena: BufferArena | None = None):
        self._arena = arena or BufferArena.shared()
        self._acc = Accumulator()

    def _output(self):
        raise NotImplementedError

    async def _decode(self, source: ByteSource) -> memoryview:
        arena = self._arena
        acc = self._acc
        output = self._output()

        acc.reset()
        output.reset()

        offset = 0
        while True:
            n = await arena.fill(source)
            if n == 0:
                # "65 " ends with an empty token, no final byte
                if acc.pending:
                    output.append(acc.flush(offset))
                return output.view()

            for c in arena.staged(n):
                if c == SPACE:
                    output.append(acc.flush(offset))
                else:
                    acc.digit(c, offset)
                offset += 1


class StreamingFixedDecoder(StreamingDecoder):
    '''
    streams into the arena's fixed output buffer

    raises BufferOverflowError instead of truncating when the output does not
    fit. shares both buffers with every other decoder on the same arena, so
    the same single task rule as SharedBufferDecoder applies.
    '''
    def _output(self):
        return self._arena.output


class StreamingDynamicDecoder(StreamingDecoder):
    '''
    streams into a growable buffer owned by this decoder

    there is no output ceiling. the buffer keeps its largest capacity between
    calls, so repeated calls of similar size do not reallocate. the returned
    view is only good until the next call on this decoder. the input buffer
    is still the arena's.
    '''
    def __init__(self, arena: BufferArena | None = None, initial_capacity: int = 64):
        super().__init__(arena)
        self._buffer = DynamicBuffer(initial_capacity)

    def _output(self):
        return self._buffer

    @property
    def buffer(self) -> DynamicBuffer:
        return self._buffer
