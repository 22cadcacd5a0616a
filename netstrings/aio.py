#!/usr/bin/python3

import sys

from .netstring import _Parser, DEFAULT_CHUNK_SIZE

class AsyncDecoder(_Parser):
    '''Asynchronous iterator over the netstrings read from `reader', an
    asyncio.StreamReader or any object whose read(size) is a coroutine.
    Behaves as netstrings.Decoder, except that it only suspends while
    waiting on the reader.'''

    def __init__(self, reader, max_length=sys.maxsize,
                 chunk_size=DEFAULT_CHUNK_SIZE):
        _Parser.__init__(self, max_length, chunk_size)
        self.reader = reader

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self._finished():
            raise StopAsyncIteration

        while True:
            value = self._parse()
            if value is not None:
                return value

            chunk = await self.reader.read(self.chunk_size)
            if not chunk:
                self._end_of_stream()
                raise StopAsyncIteration
            self._append(chunk)

# vim: set ts=8 sts=4 sw=4 ai et :
