from jiema import (
    BytesSource,
    WholeInputDecoder,
    SharedBufferDecoder,
    StreamingFixedDecoder,
    StreamingDynamicDecoder,
    new_concurrent_decoder,
)
import asyncio
import logging
import sys
import time
import tracemalloc


logging.basicConfig(stream=sys.stdout, level=logging.INFO,
                    format="%(asctime)s - %(levelname)s - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                    )


TEST_INPUT = (
    b'76 111 114 101 109 32 105 112 115 117 109 32 100 111 108 111 114 32 115'
    b' 105 116 32 97 109 101 116 44 32 99 111 110 115 101 99 116 101 116 117'
    b' 114 32 97 100 105 112 105 115 99 105 110 103 32 101 108 105 116 46')

ROUNDS = 20000
WORKERS = 64


async def bench_decoder(name, decode):
    r = BytesSource()
    sink = 0

    start = time.perf_counter()
    for _ in range(ROUNDS):
        r.reset(TEST_INPUT)
        out = await decode(r)
        sink ^= len(out)
    elapsed = time.perf_counter() - start

    # one more call under tracemalloc, every block still alive after it was
    # allocated by the decode (or the source) and not given back
    r.reset(TEST_INPUT)
    tracemalloc.start()
    before = tracemalloc.take_snapshot()
    out = await decode(r)
    after = tracemalloc.take_snapshot()
    tracemalloc.stop()

    stats = after.compare_to(before, 'lineno')
    blocks = sum(s.count_diff for s in stats if s.count_diff > 0)
    size = sum(s.size_diff for s in stats if s.size_diff > 0)

    logging.info(f'{name}: {elapsed / ROUNDS * 1e6:.2f} us/op, '
                 f'{blocks} retained blocks ({size} B) per call, sink={sink}')


async def bench_concurrent():
    input_queue: asyncio.Queue[bytes | None] = asyncio.Queue(maxsize=WORKERS)
    output_queue: asyncio.Queue[bytes] = asyncio.Queue(maxsize=WORKERS)

    async def worker():
        decode = new_concurrent_decoder()
        r = BytesSource()
        while True:
            data = await input_queue.get()
            if data is None:
                return
            r.reset(data)
            out = await decode(r)
            await output_queue.put(bytes(out))

    async def producer():
        for _ in range(ROUNDS):
            await input_queue.put(TEST_INPUT)
        for _ in range(WORKERS):
            await input_queue.put(None)

    start = time.perf_counter()
    async with asyncio.TaskGroup() as tg:
        for _ in range(WORKERS):
            tg.create_task(worker())
        tg.create_task(producer())

        for _ in range(ROUNDS):
            await output_queue.get()
    elapsed = time.perf_counter() - start

    logging.info(f'Concurrent ({WORKERS} workers): {elapsed / ROUNDS * 1e6:.2f} us/op')


async def main():
    await bench_decoder('Simple', WholeInputDecoder().decode)
    await bench_decoder('Prealloc', SharedBufferDecoder().decode)
    await bench_decoder('NoAlloc', StreamingFixedDecoder().decode)
    await bench_decoder('Dynamic', StreamingDynamicDecoder().decode)
    await bench_decoder('Concurrent', new_concurrent_decoder())
    await bench_concurrent()


asyncio.run(main())
