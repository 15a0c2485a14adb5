from .errors import FormatError


SPACE = 0x20
ZERO = 0x30
NINE = 0x39
MAX_VALUE = 0xff


def parse_token(token: bytes, offset: int | None = None) -> int:
    '''
    parses one complete token, e.g. b'79' -> 79
    '''
    if not token:
        raise FormatError('empty token', offset)

    # bytes.isdigit only accepts ascii digits, int() would also take signs,
    # underscores and surrounding whitespace
    if not token.isdigit():
        raise FormatError(f'invalid token {token[:16]!r}', offset)

    # digit by digit like Accumulator, int() refuses very long digit strings
    value = 0
    for c in token:
        value = value * 10 + c - ZERO
        if value > MAX_VALUE:
            raise FormatError(f'value {token[:16]!r} out of range', offset)

    return value


def split_tokens(data: bytes) -> list[bytes]:
    tokens = data.split(b' ')

    # "65 " and "" carry no final byte
    if tokens[-1] == b'':
        tokens.pop()

    return tokens


class Accumulator:
    '''
    builds one byte value from ascii digits fed one at a time, without ever
    materializing the token
    '''
    __slots__ = ('value', 'pending')

    def __init__(self):
        self.reset()

    def reset(self):
        self.value = 0
        self.pending = False

    def digit(self, c: int, offset: int):
        if c < ZERO or c > NINE:
            raise FormatError(f'invalid character {bytes([c])!r}', offset)

        self.value = self.value * 10 + c - ZERO
        if self.value > MAX_VALUE:
            raise FormatError(f'value {self.value} out of range', offset)
        self.pending = True

    def flush(self, offset: int) -> int:
        if not self.pending:
            raise FormatError('empty token', offset)

        value = self.value
        self.reset()
        return value
