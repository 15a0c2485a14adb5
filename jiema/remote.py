import aiohttp
import logging
from typing import Awaitable, Callable
from .source import ByteSource


async def fetch(url, decode: Callable[[ByteSource], Awaitable[bytes | memoryview]]) -> bytes:
    '''
    decodes an HTTP response body straight off the connection

    the body is handed to decode as the response's stream reader, so the
    chunking is whatever the transport delivers. returns a copy since the
    decoder's view is only good until its next call.
    '''
    logging.info(f'fetching {url}')

    async with aiohttp.ClientSession() as session:
        async with session.get(url) as res:
            if not res.status == 200:
                raise ConnectionError(f'unable to fetch {url}: status code {res.status}')

            data = await decode(res.content)
            logging.debug(f'decoded {len(data)} bytes from {url}')

            return bytes(data)
