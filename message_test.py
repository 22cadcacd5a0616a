#!/usr/bin/python3

import io, unittest

from google.protobuf import wrappers_pb2

from netstrings import (ChunkSource, Decoder, InvalidMessage, Writer,
                        read_messages, write_message)

class TestMessages(unittest.TestCase):
    def testRoundTrip(self):
        sink = io.BytesIO()
        writer = Writer(sink)
        for text in ['hello', '', '3:a,']:
            write_message(writer, wrappers_pb2.StringValue(value=text))
        sink.seek(0)

        messages = read_messages(Decoder(sink), wrappers_pb2.StringValue)
        self.assertEqual([m.value for m in messages], ['hello', '', '3:a,'])

    def testFraming(self):
        sink = io.BytesIO()
        write_message(Writer(sink), wrappers_pb2.UInt32Value(value=1))
        self.assertEqual(sink.getvalue(), b'2:\x08\x01,')

    def testChunked(self):
        data = b'2:\x08\x01,0:,2:\x08\x07,'
        chunks = [data[i:i+1] for i in range(len(data))]
        messages = read_messages(Decoder(ChunkSource(chunks)),
                                 wrappers_pb2.UInt32Value)
        self.assertEqual([m.value for m in messages], [1, 0, 7])

    def testInvalidMessage(self):
        decoder = Decoder(io.BytesIO(b'4:\x0a\x05ab,'))
        messages = read_messages(decoder, wrappers_pb2.StringValue)
        self.assertRaises(InvalidMessage, list, messages)

if __name__ == '__main__':
    unittest.main()

# vim: set ts=8 sts=4 sw=4 ai et :
