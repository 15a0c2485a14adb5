import asyncio
from typing import Protocol


class ByteSource(Protocol):
    '''
    anything with the asyncio.StreamReader read contract: up to n bytes,
    b'' at end of stream, OSError on failure
    '''
    async def read(self, n: int) -> bytes:
        ...


class BytesSource:
    '''
    in-memory source over a bytes object, reusable through reset()

    chunk_size caps how much a single read returns, which is how a slow or
    fragmented transport looks to a decoder. every read yields to the event
    loop once.
    '''
    def __init__(self, data: bytes = b'', chunk_size: int | None = None):
        if chunk_size is not None and chunk_size <= 0:
            raise ValueError(f'invalid chunk size: {chunk_size}')

        self._chunk_size = chunk_size
        self.reset(data)

    def reset(self, data: bytes):
        self._data = bytes(data)
        self._index = 0

    async def read(self, n: int = -1) -> bytes:
        await asyncio.sleep(0)

        if n < 0:
            n = len(self._data) - self._index
        if self._chunk_size is not None:
            n = min(n, self._chunk_size)

        res = self._data[self._index:self._index+n]
        self._index += len(res)
        return res

    @property
    def remaining(self) -> int:
        return len(self._data) - self._index


def stream_reader(data: bytes) -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    reader.feed_eof()
    return reader
