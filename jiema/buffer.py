import logging
from .errors import BufferOverflowError


INPUT_BUFFER_SIZE = 4096
OUTPUT_BUFFER_SIZE = 4096
GROWTH_FACTOR = 2


class FixedBuffer:
    '''
    output region with a capacity fixed at construction

    storage is allocated once and overwritten by every user, views returned
    by view() alias it
    '''
    def __init__(self, capacity: int = OUTPUT_BUFFER_SIZE):
        if capacity <= 0:
            raise ValueError(f'invalid capacity: {capacity}')

        self._data = bytearray(capacity)
        self._length = 0

    def reset(self):
        self._length = 0

    def append(self, value: int):
        if self._length == len(self._data):
            raise BufferOverflowError(len(self._data))

        self._data[self._length] = value
        self._length += 1

    def view(self) -> memoryview:
        return memoryview(self._data)[:self._length]

    @property
    def capacity(self) -> int:
        return len(self._data)

    def __len__(self):
        return self._length


class DynamicBuffer:
    '''
    append-only byte array with separate length and capacity

    capacity grows by GROWTH_FACTOR whenever an append does not fit, so n
    appends cost O(log n) reallocations. it never shrinks: reset() only
    drops the logical length and keeps the storage for the next use.
    '''
    def __init__(self, initial_capacity: int = 64):
        if initial_capacity <= 0:
            raise ValueError(f'invalid capacity: {initial_capacity}')

        self._data = bytearray(initial_capacity)
        self._length = 0
        self.reallocations = 0

    def reset(self):
        self._length = 0

    def append(self, value: int):
        if self._length == len(self._data):
            self._grow()

        self._data[self._length] = value
        self._length += 1

    def _grow(self):
        # a fresh bytearray rather than resizing in place, the old storage
        # may still be exported through a view handed out earlier
        capacity = len(self._data) * GROWTH_FACTOR
        data = bytearray(capacity)
        data[:self._length] = self._data[:self._length]
        self._data = data
        self.reallocations += 1
        logging.debug(f'dynamic buffer grown to {capacity} bytes')

    def view(self) -> memoryview:
        return memoryview(self._data)[:self._length]

    @property
    def capacity(self) -> int:
        return len(self._data)

    def __len__(self):
        return self._length


class BufferArena:
    '''
    an input staging buffer plus a fixed output buffer

    an arena has exactly one owner at a time. nothing here locks: two decode
    calls running over the same arena will overwrite each other's bytes.
    '''
    def __init__(self, input_size: int = INPUT_BUFFER_SIZE, output_size: int = OUTPUT_BUFFER_SIZE):
        if input_size <= 0:
            raise ValueError(f'invalid input buffer size: {input_size}')

        self.input = bytearray(input_size)
        self.output = FixedBuffer(output_size)

    @classmethod
    def shared(cls) -> 'BufferArena':
        '''
        the process-wide arena used by the shared-buffer decoders

        whoever acquires it is responsible for not using it from two tasks
        at once
        '''
        return _SHARED_ARENA

    async def fill(self, source) -> int:
        '''
        reads one chunk from source into the input buffer, 0 means end of
        stream
        '''
        chunk = await source.read(len(self.input))
        n = len(chunk)
        if n > len(self.input):
            raise ValueError(f'source returned {n} bytes, asked for at most {len(self.input)}')
        self.input[:n] = chunk
        return n

    def staged(self, n: int) -> memoryview:
        return memoryview(self.input)[:n]


_SHARED_ARENA = BufferArena()
