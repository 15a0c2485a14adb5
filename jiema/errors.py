class DecodeError(Exception):
    '''
    raised when a decode call cannot produce its output
    '''


class FormatError(DecodeError, ValueError):
    '''
    malformed input, never worth retrying
    '''
    def __init__(self, message: str, offset: int | None = None):
        if offset is not None:
            message = f'{message} at offset {offset}'
        super().__init__(message)
        self.offset = offset


class BufferOverflowError(DecodeError, BufferError):
    '''
    decoded output does not fit a fixed-capacity buffer
    '''
    def __init__(self, capacity: int):
        super().__init__(f'output buffer too small: capacity is {capacity} bytes')
        self.capacity = capacity
