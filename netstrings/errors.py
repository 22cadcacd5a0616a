#!/usr/bin/python3

class DecoderError(RuntimeError): pass

class IllegalSizeField(DecoderError): pass

class SizeFieldTooWide(DecoderError): pass

class SizeExceedsLimit(DecoderError): pass

class MissingPayloadTerminator(DecoderError): pass

class UnexpectedEndOfStream(DecoderError): pass

class TrailingData(DecoderError): pass

class InvalidMessage(DecoderError): pass

# vim: set ts=8 sts=4 sw=4 ai et :
