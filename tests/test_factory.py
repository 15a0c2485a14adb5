from jiema import BytesSource, ConcurrentDecoder, new_concurrent_decoder
from jiema.buffer import BufferArena
from jiema.errors import BufferOverflowError
import asyncio
import unittest


LOREM_INPUT = (
    b'76 111 114 101 109 32 105 112 115 117 109 32 100 111 108 111 114 32 115'
    b' 105 116 32 97 109 101 116 44 32 99 111 110 115 101 99 116 101 116 117'
    b' 114 32 97 100 105 112 105 115 99 105 110 103 32 101 108 105 116 46')

LOREM_OUTPUT = b'Lorem ipsum dolor sit amet, consectetur adipiscing elit.'

TASKS = 64
ROUNDS = 8


class ConcurrentDecoderTests(unittest.IsolatedAsyncioTestCase):
    async def test_owns_private_arena(self):
        a, b = ConcurrentDecoder(), ConcurrentDecoder()

        self.assertIsNot(a.arena, b.arena)
        self.assertIsNot(a.arena.input, b.arena.input)
        self.assertIsNot(a.arena, BufferArena.shared())

    async def test_buffers_reused_between_calls(self):
        decoder = ConcurrentDecoder()
        storage = decoder.arena.input

        first = await decoder.decode(BytesSource(LOREM_INPUT))
        second = await decoder.decode(BytesSource(b'79 75'))

        self.assertIs(storage, decoder.arena.input)
        self.assertEqual(b'OK', bytes(second))
        # same storage, the first view now shows the second result
        self.assertEqual(b'OK', bytes(first[:2]))

    async def test_sizes(self):
        decoder = ConcurrentDecoder(input_size=16, output_size=2)

        self.assertEqual(16, len(decoder.arena.input))
        with self.assertRaises(BufferOverflowError):
            await decoder.decode(BytesSource(b'1 2 3'))

    async def test_factory_returns_routine(self):
        decode = new_concurrent_decoder()

        self.assertEqual(b'OK', bytes(await decode(BytesSource(b'79 75'))))

    async def test_concurrent_tasks(self):
        async def worker(results: list):
            # one decoder per task, reused for every round
            decode = new_concurrent_decoder()
            r = BytesSource(chunk_size=7)
            for _ in range(ROUNDS):
                r.reset(LOREM_INPUT)
                out = await decode(r)
                results.append(bytes(out))

        results = []
        async with asyncio.TaskGroup() as tg:
            for _ in range(TASKS):
                tg.create_task(worker(results))

        self.assertEqual(TASKS * ROUNDS, len(results))
        for out in results:
            self.assertEqual(LOREM_OUTPUT, out)

    async def test_concurrent_threads(self):
        def worker() -> list:
            async def run():
                decode = new_concurrent_decoder()
                r = BytesSource(chunk_size=5)
                outs = []
                for _ in range(ROUNDS):
                    r.reset(LOREM_INPUT)
                    outs.append(bytes(await decode(r)))
                return outs

            return asyncio.run(run())

        results = await asyncio.gather(*[asyncio.to_thread(worker) for _ in range(16)])

        for outs in results:
            self.assertEqual([LOREM_OUTPUT] * ROUNDS, outs)
