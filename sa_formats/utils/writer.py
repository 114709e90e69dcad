import io
import struct


class BinaryWriter(object):

	def __init__(self, stream=None):
		if stream is None:
			self.stream = io.BytesIO()
		elif isinstance(stream, (bytes, bytearray)):
			self.stream = io.BytesIO(stream)
		else:
			self.stream = stream

	def tell(self):
		return self.stream.tell()

	def getvalue(self):
		return self.stream.getvalue()

	def write_bytes(self, value):
		return self.stream.write(value)

	def pack(self, fmt, data):
		return self.write_bytes(struct.pack(fmt, data))

	def write_float(self, value, endian='<'):
		return self.pack(f'{endian}f', value)

	def write_uint8(self, value, endian='<'):
		return self.pack(f'{endian}B', value)

	def write_int16(self, value, endian='<'):
		return self.pack(f'{endian}h', value)

	def write_uint16(self, value, endian='<'):
		return self.pack(f'{endian}H', value)

	def write_uint32(self, value, endian='<'):
		return self.pack(f'{endian}I', value)

	def write_vec3(self, value, endian='<'):
		for component in value:
			self.write_float(component, endian)

	# packs an (r, g, b, a) tuple as ARGB8888
	def write_color(self, value, endian='<'):
		r, g, b, a = value
		return self.write_uint32((a << 24) | (r << 16) | (g << 8) | b, endian)
