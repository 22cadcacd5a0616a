#!/usr/bin/python3

from google.protobuf.message import DecodeError

from .errors import InvalidMessage

def write_message(writer, message):
    '''Write protobuf `message' to `writer' as one netstring.'''
    writer.write(message.SerializeToString())

def read_messages(decoder, message_class):
    '''Parse each payload from `decoder' (which must decode bytes) as a
    `message_class' protobuf message and yield the messages in stream
    order.'''

    for payload in decoder:
        message = message_class()
        try:
            message.ParseFromString(payload)
        except DecodeError as e:
            raise InvalidMessage('payload is not a valid %s message' %
                                 message_class.DESCRIPTOR.full_name) from e
        yield message

# vim: set ts=8 sts=4 sw=4 ai et :
