#!/usr/bin/python3

import logging, os, re, sys

from .errors import (IllegalSizeField, SizeFieldTooWide, SizeExceedsLimit,
                     MissingPayloadTerminator, UnexpectedEndOfStream,
                     TrailingData)

log = logging.getLogger(__name__)

MAX_SIZE_WIDTH = 10
DEFAULT_CHUNK_SIZE = 2048

# One digit more than allowed is matched so that an over-wide size field is
# reported as such rather than as an illegal unit after ten digits.
_size_re = r'(0|[1-9][0-9]{0,%d})(:)?' % MAX_SIZE_WIDTH
SIZE_PATTERN = re.compile(_size_re.encode('ascii'))
TEXT_SIZE_PATTERN = re.compile(_size_re)

def encode(value):
    if isinstance(value, str):
        return '%d:%s,' % (len(value), value)
    return b'%d:%s,' % (len(value), value)

def decode(data, max_length=sys.maxsize):
    '''Decode a single complete netstring held in memory. For streams of
    netstrings use a Decoder instead of repeated calls to this function.'''

    decoder = Decoder(ChunkSource([data]), max_length=max_length,
                      chunk_size=max(len(data), 1))
    try:
        value = next(decoder)
    except StopIteration:
        raise UnexpectedEndOfStream('no netstring found')
    if decoder.peek_buffer():
        raise TrailingData('data follows the netstring')
    return value

class ChunkSource(object):
    '''Pull source handing out the chunks of an iterable, split to the size
    asked for. Empty chunks in the iterable are skipped so that only
    exhaustion of the iterable reads as end of stream.'''

    def __init__(self, chunks):
        self.chunks = iter(chunks)
        self.chunk = b''
        self.chunk_idx = 0

    def read(self, size=-1):
        while self.chunk_idx >= len(self.chunk):
            try:
                chunk = next(self.chunks)
            except StopIteration:
                return self.chunk[:0]
            self.chunk = chunk
            self.chunk_idx = 0

        if size < 0:
            end = len(self.chunk)
        else:
            end = self.chunk_idx + size
        data = self.chunk[self.chunk_idx:end]
        self.chunk_idx += len(data)
        return data

class _Parser(object):
    SIZE, DATA, DONE, FAILED = range(4)

    def __init__(self, max_length=sys.maxsize,
                 chunk_size=DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError('chunk_size must be at least 1, not %r' %
                             chunk_size)
        self._max_length = max_length
        self.chunk_size = chunk_size
        self.state = _Parser.SIZE
        self.size = None
        self.error = None

        # Buffered input is data[data_idx:] followed by the chunks in
        # pending, which are only joined when they need to be looked at.
        self.data = b''
        self.data_idx = 0
        self.pending = []
        self.pending_len = 0

    @property
    def max_length(self):
        return self._max_length

    def peek_buffer(self):
        self._coalesce()
        return self.data[self.data_idx:]

    def _buffered(self):
        return len(self.data) - self.data_idx + self.pending_len

    def _append(self, chunk):
        # memoryview chunks, as from recv_into(), cannot be joined
        if isinstance(chunk, memoryview):
            chunk = chunk.tobytes()
        self.pending.append(chunk)
        self.pending_len += len(chunk)

    def _coalesce(self):
        if not self.pending:
            return
        pieces = self.pending
        if self.data_idx < len(self.data):
            pieces = [self.data[self.data_idx:]] + pieces
        self.data = pieces[0][:0].join(pieces)
        self.data_idx = 0
        self.pending = []
        self.pending_len = 0

    def _fail(self, error):
        log.warning('netstring decoder failed: %s', error)
        self.state = _Parser.FAILED
        self.error = error
        raise error

    def _finished(self):
        if self.state == _Parser.FAILED:
            raise self.error
        return self.state == _Parser.DONE

    def _end_of_stream(self):
        if self.state == _Parser.SIZE and not self._buffered():
            log.debug('end of netstring stream')
            self.state = _Parser.DONE
            return
        if self.state == _Parser.SIZE:
            self._fail(UnexpectedEndOfStream('end of stream in size field'))
        self._fail(UnexpectedEndOfStream('end of stream in payload'))

    def _parse_size(self):
        if isinstance(self.data, str):
            pattern = TEXT_SIZE_PATTERN
        else:
            pattern = SIZE_PATTERN

        match = pattern.match(self.data, self.data_idx)
        if match is None:
            self._fail(IllegalSizeField('illegal size field'))

        digits, terminator = match.groups()
        if len(digits) > MAX_SIZE_WIDTH:
            self._fail(SizeFieldTooWide('size field exceeded maximum width'))
        if terminator is None:
            if match.end() < len(self.data):
                self._fail(IllegalSizeField('illegal size field'))
            return False

        size = int(digits)
        if size > self._max_length:
            self._fail(SizeExceedsLimit(
                'requested size %d exceeded maximum length %d' %
                (size, self._max_length)))

        self.data_idx = match.end()
        self.size = size
        self.state = _Parser.DATA
        return True

    def _parse(self):
        '''Return the next value that can be completed from buffered input,
        or None if more input is needed.'''

        if self.state == _Parser.SIZE:
            self._coalesce()
            if self.data_idx == len(self.data):
                return None
            if not self._parse_size():
                return None

        if self._buffered() <= self.size: # <= for ','
            return None

        self._coalesce()
        end = self.data_idx + self.size
        terminator = ',' if isinstance(self.data, str) else b','
        if self.data[end:end+1] != terminator:
            self._fail(MissingPayloadTerminator('payload terminator not found'))

        value = self.data[self.data_idx:end]
        self.data_idx = end + 1
        if self.data_idx == len(self.data):
            self.data = self.data[:0]
            self.data_idx = 0
        self.state = _Parser.SIZE
        self.size = None
        log.debug('decoded netstring of length %d', len(value))
        return value

class Decoder(_Parser):
    '''Iterator over the netstrings read from `source', which is any object
    with a read(size) method returning an empty chunk at end of stream, such
    as a file, a socket.makefile() stream or a ChunkSource. read1(size) is
    used instead where the source has it, so a buffered stream hands over
    what it holds without waiting for a full chunk. Bytes sources (chunks of
    bytes, bytearray or memoryview) decode to bytes and text sources to str.

    The source is only read when no complete netstring is left in the
    buffer. Each value declaring a size over `max_length' is rejected
    before its payload is read.

    Iteration stops at a clean end of stream. Any protocol violation raises
    a DecoderError; once that has happened the decoder raises the same
    error again on every call.
    '''

    def __init__(self, source, max_length=sys.maxsize,
                 chunk_size=DEFAULT_CHUNK_SIZE):
        _Parser.__init__(self, max_length, chunk_size)
        self.source = source
        # read1() returns what a buffered stream already holds instead of
        # waiting for a full chunk
        self._read = getattr(source, 'read1', source.read)

    def __iter__(self):
        return self

    def __next__(self):
        if self._finished():
            raise StopIteration

        while True:
            value = self._parse()
            if value is not None:
                return value

            chunk = self._read(self.chunk_size)
            if not chunk:
                self._end_of_stream()
                raise StopIteration
            self._append(chunk)

class Writer(object):
    def __init__(self, sink):
        self.sink = sink

    def write(self, value):
        self.sink.write(encode(value))

    def writeline(self, value):
        if isinstance(value, str):
            self.write(value + os.linesep)
        else:
            self.write(bytes(value) + os.linesep.encode('ascii'))

    def flush(self):
        self.sink.flush()

# vim: set ts=8 sts=4 sw=4 ai et :
