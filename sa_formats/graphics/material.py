from sa_formats.utils.reader import BinaryReader
from sa_formats.utils.writer import BinaryWriter
from sa_formats.shared.enums import AlphaInstruction, FilterMode

# --- notes ---------------------------------------------------------------------------------------
# - basic materials are 20 bytes: diffuse, specular, exponent, texture id, attribute flags
# - the chunk converter clones materials through this layout, so anything that
#   should survive a strip boundary has to be representable in it


# -------------------------------------------------------------------------------------------------
class MaterialFlags:
	USER_MASK = 0x0000007F
	PICK_STATUS = 0x00000080
	MIPMAP_D_ADJUST_SHIFT = 8
	SUPER_SAMPLE = 0x00001000
	FILTER_MODE_SHIFT = 13
	CLAMP_V = 0x00008000
	CLAMP_U = 0x00010000
	FLIP_V = 0x00020000
	FLIP_U = 0x00040000
	IGNORE_SPECULAR = 0x00080000
	USE_ALPHA = 0x00100000
	USE_TEXTURE = 0x00200000
	ENVIRONMENT_MAP = 0x00400000
	DOUBLE_SIDED = 0x00800000
	FLAT_SHADING = 0x01000000
	IGNORE_LIGHTING = 0x02000000
	DESTINATION_ALPHA_SHIFT = 26
	SOURCE_ALPHA_SHIFT = 29


# -------------------------------------------------------------------------------------------------
class Material:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, **kwargs):
		self.diffuse = (255, 255, 255, 255)
		self.specular = (255, 255, 255, 255)
		self.exponent = 11.0
		self.texture_id = 0
		self.user_flags = 0
		self.pick_status = False
		self.mipmap_d_adjust = 0
		self.super_sample = False
		self.filter_mode = FilterMode.BILINEAR
		self.clamp_u = False
		self.clamp_v = False
		self.flip_u = False
		self.flip_v = False
		self.ignore_specular = False
		self.use_alpha = False
		self.use_texture = False
		self.environment_map = False
		self.double_sided = False
		self.flat_shading = False
		self.ignore_lighting = False
		self.source_alpha = AlphaInstruction.SOURCE_ALPHA
		self.destination_alpha = AlphaInstruction.INVERSE_SOURCE_ALPHA
		for key, value in kwargs.items():
			if not hasattr(self, key):
				raise AttributeError(F"Material has no field `{key}`...")
			setattr(self, key, value)

	# ---------------------------------------------------------------------------------------------
	def __eq__(self, other):
		if not isinstance(other, Material):
			return NotImplemented
		return self.to_bytes() == other.to_bytes()

	# ---------------------------------------------------------------------------------------------
	def __repr__(self):
		return F"Material(texture_id={self.texture_id}, diffuse={self.diffuse}, flags={self.get_flags():#010x})"

	# ---------------------------------------------------------------------------------------------
	def get_flags(self):
		flags = self.user_flags & MaterialFlags.USER_MASK
		flags |= (self.mipmap_d_adjust & 0x0F) << MaterialFlags.MIPMAP_D_ADJUST_SHIFT
		flags |= (int(self.filter_mode) & 0x03) << MaterialFlags.FILTER_MODE_SHIFT
		flags |= (int(self.destination_alpha) & 0x07) << MaterialFlags.DESTINATION_ALPHA_SHIFT
		flags |= (int(self.source_alpha) & 0x07) << MaterialFlags.SOURCE_ALPHA_SHIFT
		for enabled, bit in (
			(self.pick_status, MaterialFlags.PICK_STATUS),
			(self.super_sample, MaterialFlags.SUPER_SAMPLE),
			(self.clamp_v, MaterialFlags.CLAMP_V),
			(self.clamp_u, MaterialFlags.CLAMP_U),
			(self.flip_v, MaterialFlags.FLIP_V),
			(self.flip_u, MaterialFlags.FLIP_U),
			(self.ignore_specular, MaterialFlags.IGNORE_SPECULAR),
			(self.use_alpha, MaterialFlags.USE_ALPHA),
			(self.use_texture, MaterialFlags.USE_TEXTURE),
			(self.environment_map, MaterialFlags.ENVIRONMENT_MAP),
			(self.double_sided, MaterialFlags.DOUBLE_SIDED),
			(self.flat_shading, MaterialFlags.FLAT_SHADING),
			(self.ignore_lighting, MaterialFlags.IGNORE_LIGHTING),
		):
			if enabled:
				flags |= bit
		return flags

	# ---------------------------------------------------------------------------------------------
	def set_flags(self, flags):
		self.user_flags = flags & MaterialFlags.USER_MASK
		self.pick_status = bool(flags & MaterialFlags.PICK_STATUS)
		self.mipmap_d_adjust = (flags >> MaterialFlags.MIPMAP_D_ADJUST_SHIFT) & 0x0F
		self.super_sample = bool(flags & MaterialFlags.SUPER_SAMPLE)
		self.filter_mode = FilterMode((flags >> MaterialFlags.FILTER_MODE_SHIFT) & 0x03)
		self.clamp_v = bool(flags & MaterialFlags.CLAMP_V)
		self.clamp_u = bool(flags & MaterialFlags.CLAMP_U)
		self.flip_v = bool(flags & MaterialFlags.FLIP_V)
		self.flip_u = bool(flags & MaterialFlags.FLIP_U)
		self.ignore_specular = bool(flags & MaterialFlags.IGNORE_SPECULAR)
		self.use_alpha = bool(flags & MaterialFlags.USE_ALPHA)
		self.use_texture = bool(flags & MaterialFlags.USE_TEXTURE)
		self.environment_map = bool(flags & MaterialFlags.ENVIRONMENT_MAP)
		self.double_sided = bool(flags & MaterialFlags.DOUBLE_SIDED)
		self.flat_shading = bool(flags & MaterialFlags.FLAT_SHADING)
		self.ignore_lighting = bool(flags & MaterialFlags.IGNORE_LIGHTING)
		self.destination_alpha = AlphaInstruction((flags >> MaterialFlags.DESTINATION_ALPHA_SHIFT) & 0x07)
		self.source_alpha = AlphaInstruction((flags >> MaterialFlags.SOURCE_ALPHA_SHIFT) & 0x07)

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_reader(cls, br):
		material = cls()
		material.diffuse = br.read_color()
		material.specular = br.read_color()
		material.exponent = br.read_float()
		material.texture_id = br.read_uint32()
		material.set_flags(br.read_uint32())
		return material

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_bytes(cls, data):
		return cls.from_reader(BinaryReader(data))

	# ---------------------------------------------------------------------------------------------
	def dump(self, writer):
		writer.write_color(self.diffuse)
		writer.write_color(self.specular)
		writer.write_float(self.exponent)
		writer.write_uint32(self.texture_id)
		writer.write_uint32(self.get_flags())
		return True

	# ---------------------------------------------------------------------------------------------
	def to_bytes(self):
		writer = BinaryWriter()
		self.dump(writer)
		return writer.getvalue()

	# ---------------------------------------------------------------------------------------------
	def copy(self):
		# a fresh instance with the same byte-level state
		return Material.from_bytes(self.to_bytes())

	# ---------------------------------------------------------------------------------------------
	def to_json(self):
		return {'raw': self.to_bytes().hex()}

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_json(cls, data):
		return cls.from_bytes(bytes.fromhex(data['raw']))
