from jiema import new_concurrent_decoder
from jiema.remote import fetch
import asyncio
import logging
import sys


logging.basicConfig(stream=sys.stderr, level=logging.INFO,
                    format="%(asctime)s - %(levelname)s - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                    )


async def main():
    decode = new_concurrent_decoder()

    if len(sys.argv) > 1:
        out = await fetch(sys.argv[1], decode)
    else:
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader()
        await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
        out = await decode(reader)

    sys.stdout.buffer.write(out)
    sys.stdout.buffer.flush()


asyncio.run(main())
