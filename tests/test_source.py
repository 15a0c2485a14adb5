from jiema import source
import unittest


class BytesSourceTests(unittest.IsolatedAsyncioTestCase):
    async def test_read_all(self):
        r = source.BytesSource(b'79 75')

        self.assertEqual(b'79 75', await r.read(4096))
        self.assertEqual(b'', await r.read(4096))

    async def test_read_is_bounded_by_n(self):
        r = source.BytesSource(b'79 75')

        self.assertEqual(b'79', await r.read(2))
        self.assertEqual(3, r.remaining)

    async def test_chunk_size(self):
        r = source.BytesSource(b'76 111 114', chunk_size=4)

        self.assertEqual(b'76 1', await r.read(4096))
        self.assertEqual(b'11 1', await r.read(4096))
        self.assertEqual(b'14', await r.read(4096))
        self.assertEqual(b'', await r.read(4096))

    async def test_reset(self):
        r = source.BytesSource(b'65')
        await r.read(10)
        r.reset(b'66 67')

        self.assertEqual(b'66 67', await r.read(10))

    def test_invalid_chunk_size(self):
        with self.assertRaises(ValueError):
            source.BytesSource(b'', chunk_size=0)


class StreamReaderTests(unittest.IsolatedAsyncioTestCase):
    async def test_stream_reader(self):
        reader = source.stream_reader(b'79 75')

        self.assertEqual(b'79 75', await reader.read(4096))
        self.assertTrue(reader.at_eof())

    async def test_empty_stream_reader(self):
        reader = source.stream_reader(b'')

        self.assertEqual(b'', await reader.read(4096))
