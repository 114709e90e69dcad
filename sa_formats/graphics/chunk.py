from sa_formats.utils.reader import BinaryReader
from sa_formats.utils.writer import BinaryWriter
from sa_formats.shared.error import ConversionError, UnexpectedChunkVariant
from sa_formats.shared.enums import (
	ChunkType,
	AlphaInstruction,
	FilterMode,
	VERTEX_STRIDES,
	is_chunk_type_bits,
	is_chunk_type_tiny,
	is_chunk_type_material,
	is_chunk_type_strip,
	material_has_diffuse,
	material_has_ambient,
	material_has_specular,
	strip_has_uv,
	strip_has_uvh,
	strip_has_second_uv,
	strip_has_color,
	strip_has_normal,
	vertex_has_normal,
	vertex_has_diffuse,
)
from sa_formats.graphics.basic import Bounds

# -------------------------------------------------------------------------------------------------
# chunk attaches are two little endian streams, each terminated by an END chunk:
# - vertex chunks, header is `type | flags << 8 | size << 16` followed by
#   `index_offset | count << 16`, size counted in 32-bit words
# - poly chunks, where
#   - bits (0x00-0x07) are just the 16-bit header
#   - tiny (0x08-0x0F) carry one extra 16-bit word
#   - everything from 0x10 up carries a 16-bit size, counted in 16-bit words
# poly chunk order matters, state chunks apply to the strips that follow them

UV_SCALE_NORMAL = 255.0
UV_SCALE_HIGH = 1023.0


# -------------------------------------------------------------------------------------------------
def to_chunk_type(value):
	try:
		return ChunkType(value)
	except ValueError:
		return value


# -------------------------------------------------------------------------------------------------
def encode_uv_component(value, scale):
	return max(-0x8000, min(0x7FFF, int(round(value * scale))))


# -------------------------------------------------------------------------------------------------
class VertexChunk:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, chunk_type=ChunkType.VERTEX_VERTEX, flags=0, index_offset=0):
		self.type = to_chunk_type(chunk_type)
		self.flags = flags
		self.index_offset = index_offset
		self.size = 1
		self.vertices = []
		self.normals = []
		self.diffuse = []
		if self.type not in VERTEX_STRIDES:
			raise UnexpectedChunkVariant(F"Vertex chunk type `{int(chunk_type):#04x}` is not supported...")

	# ---------------------------------------------------------------------------------------------
	def __repr__(self):
		name = getattr(self.type, 'name', F"{self.type:#04x}")
		return F"VertexChunk({name}, offset={self.index_offset}, count={self.get_vertex_count()})"

	# ---------------------------------------------------------------------------------------------
	def get_vertex_count(self):
		return len(self.vertices)

	# ---------------------------------------------------------------------------------------------
	def has_normals(self):
		return vertex_has_normal(self.type)

	# ---------------------------------------------------------------------------------------------
	def has_diffuse(self):
		return vertex_has_diffuse(self.type)

	# ---------------------------------------------------------------------------------------------
	def update_size(self):
		# size excludes the first header word but includes the offset/count word
		self.size = self.get_vertex_count() * VERTEX_STRIDES[self.type] + 1
		return self.size

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_reader(cls, br, header):
		chunk = cls(header & 0xFF, (header >> 8) & 0xFF)
		chunk.size = (header >> 16) & 0xFFFF
		chunk.index_offset = br.read_uint16()
		count = br.read_uint16()
		for _ in range(count):
			chunk.vertices.append(br.read_vec3())
			if chunk.has_normals():
				chunk.normals.append(br.read_vec3())
			if chunk.has_diffuse():
				chunk.diffuse.append(br.read_color())
		return chunk

	# ---------------------------------------------------------------------------------------------
	def dump(self, writer):
		count = self.get_vertex_count()
		if self.has_normals() and len(self.normals) != count:
			raise ValueError(F"Vertex chunk has {count} vertices but {len(self.normals)} normals...")
		if self.has_diffuse() and len(self.diffuse) != count:
			raise ValueError(F"Vertex chunk has {count} vertices but {len(self.diffuse)} colors...")
		self.update_size()
		writer.write_uint32(int(self.type) | (self.flags << 8) | (self.size << 16))
		writer.write_uint16(self.index_offset)
		writer.write_uint16(count)
		for i in range(count):
			writer.write_vec3(self.vertices[i])
			if self.has_normals():
				writer.write_vec3(self.normals[i])
			if self.has_diffuse():
				writer.write_color(self.diffuse[i])
		return True


# -------------------------------------------------------------------------------------------------
class PolyChunk:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, chunk_type):
		self.type = to_chunk_type(chunk_type)

	# ---------------------------------------------------------------------------------------------
	def __repr__(self):
		name = self.type.name if isinstance(self.type, ChunkType) else F"{self.type:#04x}"
		return F"{type(self).__name__}({name})"


# -------------------------------------------------------------------------------------------------
class PolyChunkBits(PolyChunk):
	"""
	Bits chunks without a dedicated class (cache/draw polygon list...), kept as raw flags.
	"""

	# ---------------------------------------------------------------------------------------------
	def __init__(self, chunk_type, flags=0):
		super().__init__(chunk_type)
		self.flags = flags

	# ---------------------------------------------------------------------------------------------
	def get_flags(self):
		return self.flags

	# ---------------------------------------------------------------------------------------------
	def dump(self, writer):
		writer.write_uint8(int(self.type))
		writer.write_uint8(self.get_flags() & 0xFF)
		return True


# -------------------------------------------------------------------------------------------------
class PolyChunkBitsBlendAlpha(PolyChunkBits):

	# ---------------------------------------------------------------------------------------------
	def __init__(self, source_alpha=AlphaInstruction.SOURCE_ALPHA, destination_alpha=AlphaInstruction.INVERSE_SOURCE_ALPHA):
		super().__init__(ChunkType.BITS_BLEND_ALPHA)
		self.source_alpha = AlphaInstruction(source_alpha)
		self.destination_alpha = AlphaInstruction(destination_alpha)

	# ---------------------------------------------------------------------------------------------
	def get_flags(self):
		return (int(self.source_alpha) << 3) | int(self.destination_alpha)

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_flags(cls, flags):
		return cls((flags >> 3) & 0x07, flags & 0x07)


# -------------------------------------------------------------------------------------------------
class PolyChunkBitsMipmapDAdjust(PolyChunkBits):

	# ---------------------------------------------------------------------------------------------
	def __init__(self, mipmap_d_adjust=0):
		super().__init__(ChunkType.BITS_MIPMAP_D_ADJUST)
		self.mipmap_d_adjust = mipmap_d_adjust

	# ---------------------------------------------------------------------------------------------
	def get_flags(self):
		return self.mipmap_d_adjust & 0x0F

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_flags(cls, flags):
		return cls(flags & 0x0F)


# -------------------------------------------------------------------------------------------------
class PolyChunkBitsSpecularExponent(PolyChunkBits):

	# ---------------------------------------------------------------------------------------------
	def __init__(self, specular_exponent=0):
		super().__init__(ChunkType.BITS_SPECULAR_EXPONENT)
		self.specular_exponent = specular_exponent

	# ---------------------------------------------------------------------------------------------
	def get_flags(self):
		return self.specular_exponent & 0x1F

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_flags(cls, flags):
		return cls(flags & 0x1F)


# -------------------------------------------------------------------------------------------------
class PolyChunkTinyTextureID(PolyChunk):

	# ---------------------------------------------------------------------------------------------
	def __init__(self, chunk_type=ChunkType.TINY_TEXTURE_ID, **kwargs):
		super().__init__(chunk_type)
		self.mipmap_d_adjust = 0
		self.clamp_u = False
		self.clamp_v = False
		self.flip_u = False
		self.flip_v = False
		self.texture_id = 0
		self.super_sample = False
		self.filter_mode = FilterMode.BILINEAR
		for key, value in kwargs.items():
			if not hasattr(self, key):
				raise AttributeError(F"Texture chunk has no field `{key}`...")
			setattr(self, key, value)

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_reader(cls, br, chunk_type, flags):
		chunk = cls(chunk_type)
		chunk.mipmap_d_adjust = flags & 0x0F
		chunk.clamp_v = bool(flags & 0x10)
		chunk.clamp_u = bool(flags & 0x20)
		chunk.flip_v = bool(flags & 0x40)
		chunk.flip_u = bool(flags & 0x80)
		data = br.read_uint16()
		chunk.texture_id = data & 0x1FFF
		chunk.super_sample = bool(data & 0x2000)
		chunk.filter_mode = FilterMode((data >> 14) & 0x03)
		return chunk

	# ---------------------------------------------------------------------------------------------
	def dump(self, writer):
		flags = self.mipmap_d_adjust & 0x0F
		flags |= 0x10 if self.clamp_v else 0
		flags |= 0x20 if self.clamp_u else 0
		flags |= 0x40 if self.flip_v else 0
		flags |= 0x80 if self.flip_u else 0
		writer.write_uint8(int(self.type))
		writer.write_uint8(flags)
		data = self.texture_id & 0x1FFF
		data |= 0x2000 if self.super_sample else 0
		data |= (int(self.filter_mode) & 0x03) << 14
		writer.write_uint16(data)
		return True


# -------------------------------------------------------------------------------------------------
class PolyChunkMaterial(PolyChunk):
	"""
	Material state chunk. Which colors it carries depends on its type, the others are None.
	The specular exponent rides in the alpha channel of the specular color.
	"""

	# ---------------------------------------------------------------------------------------------
	def __init__(self, chunk_type=ChunkType.MATERIAL_DIFFUSE_SPECULAR, **kwargs):
		super().__init__(chunk_type)
		self.source_alpha = AlphaInstruction.SOURCE_ALPHA
		self.destination_alpha = AlphaInstruction.INVERSE_SOURCE_ALPHA
		self.diffuse = (255, 255, 255, 255) if material_has_diffuse(self.type) else None
		self.ambient = (255, 255, 255, 255) if material_has_ambient(self.type) else None
		self.specular = (255, 255, 255, 255) if material_has_specular(self.type) else None
		self.specular_exponent = 0
		for key, value in kwargs.items():
			if not hasattr(self, key):
				raise AttributeError(F"Material chunk has no field `{key}`...")
			setattr(self, key, value)

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_reader(cls, br, chunk_type, flags):
		chunk = cls(chunk_type)
		chunk.source_alpha = AlphaInstruction((flags >> 3) & 0x07)
		chunk.destination_alpha = AlphaInstruction(flags & 0x07)
		br.read_uint16() # size
		if material_has_diffuse(chunk.type):
			chunk.diffuse = br.read_color()
		if material_has_ambient(chunk.type):
			chunk.ambient = br.read_color()
		if material_has_specular(chunk.type):
			r, g, b, a = br.read_color()
			chunk.specular = (r, g, b, 255)
			chunk.specular_exponent = a
		return chunk

	# ---------------------------------------------------------------------------------------------
	def dump(self, writer):
		colors = []
		if material_has_diffuse(self.type):
			colors.append(self.diffuse)
		if material_has_ambient(self.type):
			colors.append(self.ambient)
		if material_has_specular(self.type):
			r, g, b, _ = self.specular
			colors.append((r, g, b, self.specular_exponent & 0xFF))
		writer.write_uint8(int(self.type))
		writer.write_uint8((int(self.source_alpha) << 3) | int(self.destination_alpha))
		writer.write_uint16(len(colors) * 2)
		for color in colors:
			writer.write_color(color)
		return True


# -------------------------------------------------------------------------------------------------
class StripEntry:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, indexes, reversed=False, uvs=None, vcolors=None, uvs2=None, user_flags=None):
		self.indexes = list(indexes)
		self.reversed = reversed
		self.uvs = uvs
		self.vcolors = vcolors
		self.uvs2 = uvs2
		self.user_flags = user_flags

	# ---------------------------------------------------------------------------------------------
	def __repr__(self):
		return F"StripEntry({self.indexes}, reversed={self.reversed})"


# -------------------------------------------------------------------------------------------------
class PolyChunkStrip(PolyChunk):

	# ---------------------------------------------------------------------------------------------
	def __init__(self, chunk_type=ChunkType.STRIP_STRIP, **kwargs):
		super().__init__(chunk_type)
		self.ignore_light = False
		self.ignore_specular = False
		self.ignore_ambient = False
		self.use_alpha = False
		self.double_side = False
		self.flat_shading = False
		self.environment_mapping = False
		self.extra_flags = 0
		self.user_flag_count = 0
		self.strips = []
		for key, value in kwargs.items():
			if not hasattr(self, key):
				raise AttributeError(F"Strip chunk has no field `{key}`...")
			setattr(self, key, value)

	# ---------------------------------------------------------------------------------------------
	def has_uv(self):
		return strip_has_uv(self.type)

	# ---------------------------------------------------------------------------------------------
	def has_vcolor(self):
		return strip_has_color(self.type)

	# ---------------------------------------------------------------------------------------------
	def get_flags(self):
		flags = self.extra_flags & 0x80
		for enabled, bit in (
			(self.ignore_light, 0x01),
			(self.ignore_specular, 0x02),
			(self.ignore_ambient, 0x04),
			(self.use_alpha, 0x08),
			(self.double_side, 0x10),
			(self.flat_shading, 0x20),
			(self.environment_mapping, 0x40),
		):
			if enabled:
				flags |= bit
		return flags

	# ---------------------------------------------------------------------------------------------
	def set_flags(self, flags):
		self.ignore_light = bool(flags & 0x01)
		self.ignore_specular = bool(flags & 0x02)
		self.ignore_ambient = bool(flags & 0x04)
		self.use_alpha = bool(flags & 0x08)
		self.double_side = bool(flags & 0x10)
		self.flat_shading = bool(flags & 0x20)
		self.environment_mapping = bool(flags & 0x40)
		self.extra_flags = flags & 0x80

	# ---------------------------------------------------------------------------------------------
	def _get_uv_scale(self):
		return UV_SCALE_HIGH if strip_has_uvh(self.type) else UV_SCALE_NORMAL

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_reader(cls, br, chunk_type, flags):
		chunk = cls(chunk_type)
		if strip_has_normal(chunk.type):
			raise UnexpectedChunkVariant(F"Reading strip chunk type `{int(chunk.type):#04x}` is not supported...")
		chunk.set_flags(flags)
		br.read_uint16() # size
		header = br.read_uint16()
		chunk.user_flag_count = header >> 14
		scale = chunk._get_uv_scale()

		def read_uv():
			return (br.read_int16() / scale, br.read_int16() / scale)

		for _ in range(header & 0x3FFF):
			length = br.read_int16()
			entry = StripEntry([], reversed=(length < 0))
			entry.uvs = [] if chunk.has_uv() else None
			entry.uvs2 = [] if strip_has_second_uv(chunk.type) else None
			entry.vcolors = [] if chunk.has_vcolor() else None
			entry.user_flags = [] if chunk.user_flag_count else None
			for i in range(abs(length)):
				entry.indexes.append(br.read_uint16())
				if entry.uvs is not None:
					entry.uvs.append(read_uv())
				if entry.uvs2 is not None:
					entry.uvs2.append(read_uv())
				if entry.vcolors is not None:
					entry.vcolors.append(br.read_color())
				# user flags start with the first complete triangle
				if chunk.user_flag_count and i > 1:
					entry.user_flags.append([br.read_uint16() for _ in range(chunk.user_flag_count)])
			chunk.strips.append(entry)
		return chunk

	# ---------------------------------------------------------------------------------------------
	def dump(self, writer):
		if strip_has_normal(self.type):
			raise UnexpectedChunkVariant(F"Writing strip chunk type `{int(self.type):#04x}` is not supported...")
		scale = self._get_uv_scale()
		body = BinaryWriter()
		body.write_uint16((len(self.strips) & 0x3FFF) | ((self.user_flag_count & 0x03) << 14))
		for entry in self.strips:
			length = len(entry.indexes)
			body.write_int16(-length if entry.reversed else length)
			for i, index in enumerate(entry.indexes):
				body.write_uint16(index)
				if self.has_uv():
					for component in entry.uvs[i]:
						body.write_int16(encode_uv_component(component, scale))
				if strip_has_second_uv(self.type):
					uv2 = entry.uvs2[i] if entry.uvs2 is not None else entry.uvs[i]
					for component in uv2:
						body.write_int16(encode_uv_component(component, scale))
				if self.has_vcolor():
					body.write_color(entry.vcolors[i])
				if self.user_flag_count and i > 1:
					values = entry.user_flags[i - 2] if entry.user_flags else [0] * self.user_flag_count
					for value in values:
						body.write_uint16(value)
		data = body.getvalue()
		writer.write_uint8(int(self.type))
		writer.write_uint8(self.get_flags())
		writer.write_uint16(len(data) // 2)
		writer.write_bytes(data)
		return True


# -------------------------------------------------------------------------------------------------
class PolyChunkUnknown(PolyChunk):
	"""
	Any poly chunk we don't model, kept as its raw payload so it can be written back as is.
	"""

	# ---------------------------------------------------------------------------------------------
	def __init__(self, chunk_type, flags=0, raw=b''):
		super().__init__(chunk_type)
		self.flags = flags
		self.raw = raw

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_reader(cls, br, chunk_type, flags):
		if chunk_type < ChunkType.TINY_TEXTURE_ID:
			return cls(chunk_type, flags)
		if chunk_type < ChunkType.MATERIAL_DIFFUSE:
			return cls(chunk_type, flags, br.read_bytes(2))
		size = br.read_uint16()
		return cls(chunk_type, flags, br.read_bytes(size * 2))

	# ---------------------------------------------------------------------------------------------
	def dump(self, writer):
		writer.write_uint8(int(self.type))
		writer.write_uint8(self.flags)
		if self.type >= ChunkType.MATERIAL_DIFFUSE:
			writer.write_uint16(len(self.raw) // 2)
		writer.write_bytes(self.raw)
		return True


# -------------------------------------------------------------------------------------------------
def read_poly_chunk(br):
	chunk_type = to_chunk_type(br.read_uint8())
	flags = br.read_uint8()

	if chunk_type == ChunkType.END:
		return None

	if chunk_type == ChunkType.BITS_BLEND_ALPHA:
		return PolyChunkBitsBlendAlpha.from_flags(flags)
	elif chunk_type == ChunkType.BITS_MIPMAP_D_ADJUST:
		return PolyChunkBitsMipmapDAdjust.from_flags(flags)
	elif chunk_type == ChunkType.BITS_SPECULAR_EXPONENT:
		return PolyChunkBitsSpecularExponent.from_flags(flags)
	elif is_chunk_type_bits(chunk_type):
		return PolyChunkBits(chunk_type, flags)
	elif is_chunk_type_tiny(chunk_type):
		return PolyChunkTinyTextureID.from_reader(br, chunk_type, flags)
	elif is_chunk_type_material(chunk_type):
		return PolyChunkMaterial.from_reader(br, chunk_type, flags)
	elif is_chunk_type_strip(chunk_type) and not strip_has_normal(chunk_type):
		return PolyChunkStrip.from_reader(br, chunk_type, flags)
	return PolyChunkUnknown.from_reader(br, chunk_type, flags)


# -------------------------------------------------------------------------------------------------
class ChunkAttach:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, name='', bounds=None):
		self.name = name
		self.bounds = Bounds() if bounds is None else bounds
		self.vertex = []
		self.poly = []

	# ---------------------------------------------------------------------------------------------
	@staticmethod
	def vertex_from_bytes(data):
		chunks = []
		br = BinaryReader(data)
		while True:
			header = br.read_uint32()
			if (header & 0xFF) == ChunkType.END:
				break
			chunks.append(VertexChunk.from_reader(br, header))
		return chunks

	# ---------------------------------------------------------------------------------------------
	@staticmethod
	def poly_from_bytes(data):
		chunks = []
		br = BinaryReader(data)
		while True:
			chunk = read_poly_chunk(br)
			if chunk is None:
				break
			chunks.append(chunk)
		return chunks

	# ---------------------------------------------------------------------------------------------
	def vertex_to_bytes(self):
		writer = BinaryWriter()
		for chunk in self.vertex:
			chunk.dump(writer)
		writer.write_uint32(int(ChunkType.END))
		return writer.getvalue()

	# ---------------------------------------------------------------------------------------------
	def poly_to_bytes(self):
		writer = BinaryWriter()
		for chunk in self.poly:
			chunk.dump(writer)
		writer.write_uint8(int(ChunkType.END))
		writer.write_uint8(0)
		return writer.getvalue()

	# ---------------------------------------------------------------------------------------------
	def to_json(self):
		try:
			vertex, poly = self.vertex_to_bytes(), self.poly_to_bytes()
		except ConversionError as exception:
			raise exception.with_context(self.name) from exception
		return {
			'type': 'chunk',
			'name': self.name,
			'bounds': self.bounds.to_json(),
			'vertex': vertex.hex(),
			'poly': poly.hex(),
		}

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_json(cls, data):
		attach = cls(data.get('name', ''), Bounds.from_json(data['bounds']) if 'bounds' in data else None)
		try:
			attach.vertex = cls.vertex_from_bytes(bytes.fromhex(data.get('vertex', 'ff000000')))
			attach.poly = cls.poly_from_bytes(bytes.fromhex(data.get('poly', 'ff00')))
		except ConversionError as exception:
			raise exception.with_context(attach.name) from exception
		return attach
