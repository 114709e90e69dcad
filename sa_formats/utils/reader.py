import os
import io
import struct


class BinaryReader(object):

	def __init__(self, stream):
		if isinstance(stream, (bytes, bytearray)):
			self.stream = io.BytesIO(stream)
		else:
			self.stream = stream

	def seek(self, offset, whence=os.SEEK_SET):
		return self.stream.seek(offset, whence)

	def tell(self):
		return self.stream.tell()

	def unpack(self, fmt, length=1):
		data = self.stream.read(length)
		if len(data) != length:
			raise EOFError(f'Expected {length} bytes but only {len(data)} remain at {self.stream.tell()}...')
		return struct.unpack(fmt, data)[0]

	def read_bytes(self, length):
		value = self.stream.read(length)
		return value

	def read_float(self, endian='<'):
		return self.unpack(f'{endian}f', 4)

	def read_uint8(self, endian='<'):
		return self.unpack(f'{endian}B')

	def read_int16(self, endian='<'):
		return self.unpack(f'{endian}h', 2)

	def read_uint16(self, endian='<'):
		return self.unpack(f'{endian}H', 2)

	def read_uint32(self, endian='<'):
		return self.unpack(f'{endian}I', 4)

	def read_vec3(self, endian='<'):
		return (self.read_float(endian), self.read_float(endian), self.read_float(endian))

	# colors are stored as packed ARGB8888
	def read_color(self, endian='<'):
		argb = self.read_uint32(endian)
		return ((argb >> 16) & 0xFF, (argb >> 8) & 0xFF, argb & 0xFF, (argb >> 24) & 0xFF)
