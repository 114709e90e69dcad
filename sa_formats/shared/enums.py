from enum import Enum, IntEnum, IntFlag


# -------------------------------------------------------------------------------------------------
class LandTableFormat(Enum):
	SA1 = 'sa1lvl' # basic attaches
	SA2 = 'sa2lvl' # chunk attaches

	# ---------------------------------------------------------------------------------------------
	def get_target(self):
		return LandTableFormat.SA2 if self is LandTableFormat.SA1 else LandTableFormat.SA1


# -------------------------------------------------------------------------------------------------
class SurfaceFlags(IntFlag):
	NONE = 0x00000000
	SOLID = 0x00000001
	WATER = 0x00000002
	NO_FRICTION = 0x00000004
	NO_ACCELERATION = 0x00000008
	CANNOT_LAND = 0x00000040
	INCREASED_ACCELERATION = 0x00000080
	DIGGABLE = 0x00000100
	UNCLIMBABLE = 0x00001000
	HURT = 0x00010000
	FOOTPRINTS = 0x00100000
	VISIBLE = 0x80000000


# -------------------------------------------------------------------------------------------------
class BasicPolyType(IntEnum):
	TRIANGLES = 0
	QUADS = 1
	NPOLY = 2
	STRIPS = 3


# -------------------------------------------------------------------------------------------------
class AlphaInstruction(IntEnum):
	ZERO = 0
	ONE = 1
	OTHER_COLOR = 2
	INVERSE_OTHER_COLOR = 3
	SOURCE_ALPHA = 4
	INVERSE_SOURCE_ALPHA = 5
	DESTINATION_ALPHA = 6
	INVERSE_DESTINATION_ALPHA = 7


# -------------------------------------------------------------------------------------------------
class FilterMode(IntEnum):
	POINT_SAMPLED = 0
	BILINEAR = 1
	TRILINEAR = 2
	RESERVED = 3


# -------------------------------------------------------------------------------------------------
class ChunkType(IntEnum):
	NULL = 0x00
	# bits
	BITS_BLEND_ALPHA = 0x01
	BITS_MIPMAP_D_ADJUST = 0x02
	BITS_SPECULAR_EXPONENT = 0x03
	BITS_CACHE_POLYGON_LIST = 0x04
	BITS_DRAW_POLYGON_LIST = 0x05
	# tiny
	TINY_TEXTURE_ID = 0x08
	TINY_TEXTURE_ID2 = 0x09
	# material
	MATERIAL_DIFFUSE = 0x11
	MATERIAL_AMBIENT = 0x12
	MATERIAL_DIFFUSE_AMBIENT = 0x13
	MATERIAL_SPECULAR = 0x14
	MATERIAL_DIFFUSE_SPECULAR = 0x15
	MATERIAL_AMBIENT_SPECULAR = 0x16
	MATERIAL_DIFFUSE_AMBIENT_SPECULAR = 0x17
	MATERIAL_BUMP = 0x18
	MATERIAL_DIFFUSE2 = 0x19
	MATERIAL_AMBIENT2 = 0x1A
	MATERIAL_DIFFUSE_AMBIENT2 = 0x1B
	MATERIAL_SPECULAR2 = 0x1C
	MATERIAL_DIFFUSE_SPECULAR2 = 0x1D
	MATERIAL_AMBIENT_SPECULAR2 = 0x1E
	MATERIAL_DIFFUSE_AMBIENT_SPECULAR2 = 0x1F
	# vertex
	VERTEX_VERTEX_SH = 0x20
	VERTEX_VERTEX_NORMAL_SH = 0x21
	VERTEX_VERTEX = 0x22
	VERTEX_VERTEX_DIFFUSE8 = 0x23
	VERTEX_VERTEX_USER_FLAGS = 0x24
	VERTEX_VERTEX_NINJA_FLAGS = 0x25
	VERTEX_VERTEX_DIFFUSE_SPECULAR5 = 0x26
	VERTEX_VERTEX_DIFFUSE_SPECULAR4 = 0x27
	VERTEX_VERTEX_DIFFUSE_SPECULAR16 = 0x28
	VERTEX_VERTEX_NORMAL = 0x29
	VERTEX_VERTEX_NORMAL_DIFFUSE8 = 0x2A
	# volume
	VOLUME_POLYGON3 = 0x38
	VOLUME_POLYGON4 = 0x39
	VOLUME_STRIP = 0x3A
	# strip
	STRIP_STRIP = 0x40
	STRIP_STRIP_UVN = 0x41
	STRIP_STRIP_UVH = 0x42
	STRIP_STRIP_NORMAL = 0x43
	STRIP_STRIP_UVN_NORMAL = 0x44
	STRIP_STRIP_UVH_NORMAL = 0x45
	STRIP_STRIP_COLOR = 0x46
	STRIP_STRIP_UVN_COLOR = 0x47
	STRIP_STRIP_UVH_COLOR = 0x48
	STRIP_STRIP2 = 0x49
	STRIP_STRIP_UVN2 = 0x4A
	STRIP_STRIP_UVH2 = 0x4B
	# end
	END = 0xFF


# -------------------------------------------------------------------------------------------------
def is_chunk_type_bits(chunk_type):
	return chunk_type in (
		ChunkType.BITS_BLEND_ALPHA,
		ChunkType.BITS_MIPMAP_D_ADJUST,
		ChunkType.BITS_SPECULAR_EXPONENT,
		ChunkType.BITS_CACHE_POLYGON_LIST,
		ChunkType.BITS_DRAW_POLYGON_LIST,
	)


# -------------------------------------------------------------------------------------------------
def is_chunk_type_tiny(chunk_type):
	return chunk_type in (
		ChunkType.TINY_TEXTURE_ID,
		ChunkType.TINY_TEXTURE_ID2,
	)


# -------------------------------------------------------------------------------------------------
def is_chunk_type_material(chunk_type):
	return ChunkType.MATERIAL_DIFFUSE <= chunk_type <= ChunkType.MATERIAL_DIFFUSE_AMBIENT_SPECULAR2 \
		and chunk_type != ChunkType.MATERIAL_BUMP


# -------------------------------------------------------------------------------------------------
def is_chunk_type_strip(chunk_type):
	return ChunkType.STRIP_STRIP <= chunk_type <= ChunkType.STRIP_STRIP_UVH2


# -------------------------------------------------------------------------------------------------
# the low three bits of a material chunk type say which colors follow the header
def material_has_diffuse(chunk_type):
	return bool(chunk_type & 0x01)


def material_has_ambient(chunk_type):
	return bool(chunk_type & 0x02)


def material_has_specular(chunk_type):
	return bool(chunk_type & 0x04)


# -------------------------------------------------------------------------------------------------
def strip_has_uv(chunk_type):
	return chunk_type in (
		ChunkType.STRIP_STRIP_UVN,
		ChunkType.STRIP_STRIP_UVH,
		ChunkType.STRIP_STRIP_UVN_NORMAL,
		ChunkType.STRIP_STRIP_UVH_NORMAL,
		ChunkType.STRIP_STRIP_UVN_COLOR,
		ChunkType.STRIP_STRIP_UVH_COLOR,
		ChunkType.STRIP_STRIP_UVN2,
		ChunkType.STRIP_STRIP_UVH2,
	)


def strip_has_uvh(chunk_type):
	return chunk_type in (
		ChunkType.STRIP_STRIP_UVH,
		ChunkType.STRIP_STRIP_UVH_NORMAL,
		ChunkType.STRIP_STRIP_UVH_COLOR,
		ChunkType.STRIP_STRIP_UVH2,
	)


def strip_has_second_uv(chunk_type):
	return chunk_type in (
		ChunkType.STRIP_STRIP_UVN2,
		ChunkType.STRIP_STRIP_UVH2,
	)


def strip_has_color(chunk_type):
	return chunk_type in (
		ChunkType.STRIP_STRIP_COLOR,
		ChunkType.STRIP_STRIP_UVN_COLOR,
		ChunkType.STRIP_STRIP_UVH_COLOR,
	)


def strip_has_normal(chunk_type):
	return chunk_type in (
		ChunkType.STRIP_STRIP_NORMAL,
		ChunkType.STRIP_STRIP_UVN_NORMAL,
		ChunkType.STRIP_STRIP_UVH_NORMAL,
	)


# -------------------------------------------------------------------------------------------------
def vertex_has_normal(chunk_type):
	return chunk_type in (
		ChunkType.VERTEX_VERTEX_NORMAL,
		ChunkType.VERTEX_VERTEX_NORMAL_DIFFUSE8,
	)


def vertex_has_diffuse(chunk_type):
	return chunk_type in (
		ChunkType.VERTEX_VERTEX_DIFFUSE8,
		ChunkType.VERTEX_VERTEX_NORMAL_DIFFUSE8,
	)


# size of a single vertex in 32-bit words, for the vertex chunk kinds we read and write
VERTEX_STRIDES = {
	ChunkType.VERTEX_VERTEX: 3,
	ChunkType.VERTEX_VERTEX_DIFFUSE8: 4,
	ChunkType.VERTEX_VERTEX_NORMAL: 6,
	ChunkType.VERTEX_VERTEX_NORMAL_DIFFUSE8: 7,
}
