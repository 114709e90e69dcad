from enum import Enum

from pyffi.utils.tristrip import stripify

from sa_formats.graphics.basic import Strip
from sa_formats.shared.error import StripGenerationFailed

# --- notes ---------------------------------------------------------------------------------------
# - stripification itself is done by pyffi, this module only shapes its input and output
# - strips are never stitched, every strip starts with the winding of its first triangle
#   so the `reversed` flag of generated strips is always False
# - failures are fatal to the whole attach, running the stripifier again can't help


# -------------------------------------------------------------------------------------------------
class PrimitiveType(Enum):
	TRIANGLE_LIST = 0
	TRIANGLE_STRIP = 1
	TRIANGLE_FAN = 2


# -------------------------------------------------------------------------------------------------
class PrimitiveGroup:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, primitive_type, indices):
		self.type = primitive_type
		self.indices = list(indices)


# -------------------------------------------------------------------------------------------------
def pyffi_generator(indices):
	"""
	Default strip generator, returns one triangle strip primitive group per strip found.
	"""
	triangles = [tuple(indices[i:i + 3]) for i in range(0, len(indices), 3)]
	return [PrimitiveGroup(PrimitiveType.TRIANGLE_STRIP, strip) for strip in stripify(triangles, stitchstrips=False)]


# -------------------------------------------------------------------------------------------------
def is_degenerate(a, b, c):
	return a == b or b == c or a == c


# -------------------------------------------------------------------------------------------------
def triangulate_quads(quads):
	"""
	Splits quads `[a, b, c, d]` into the triangles `(a, b, c), (c, b, d)`.

	Args:
	- quads: iterable of four index sequences.

	Returns:
	- list: flat triangle list indices.
	"""
	indices = []
	for a, b, c, d in quads:
		indices.extend((a, b, c, c, b, d))
	return indices


# -------------------------------------------------------------------------------------------------
def generate_strips(indices, generator=None):
	"""
	Turns a flat triangle list into triangle strips.

	Args:
	- indices: flat triangle list, three uint16 indices per triangle.
	- generator: callable taking the flat list and returning primitive groups,
	  defaults to the pyffi stripifier.

	Returns:
	- list: `Strip` objects in the order the generator produced them.
	"""
	if len(indices) % 3 != 0:
		raise StripGenerationFailed(F"Triangle list length {len(indices)} is not a multiple of three...")

	if not indices:
		return []

	if any(index < 0 or index > 0xFFFF for index in indices):
		raise StripGenerationFailed('Triangle list contains indices outside of the uint16 range...')

	if generator is None:
		generator = pyffi_generator

	try:
		groups = generator(list(indices))
	except StripGenerationFailed:
		raise
	except Exception as exception:
		raise StripGenerationFailed(F"Strip generator failed: {exception}") from exception

	if groups is None:
		raise StripGenerationFailed('Strip generator returned no result...')

	strips = []
	for group in groups:
		if group.type is not PrimitiveType.TRIANGLE_STRIP:
			raise StripGenerationFailed(F"Strip generator returned an unexpected primitive type `{group.type}`...")
		strips.append(Strip(group.indices, False))

	has_faces = any(not is_degenerate(*indices[i:i + 3]) for i in range(0, len(indices), 3))
	if has_faces and not strips:
		raise StripGenerationFailed(F"Strip generator produced no strips for {len(indices) // 3} triangles...")

	return strips


# -------------------------------------------------------------------------------------------------
def strip_to_triangles(indexes, reversed=False):
	"""
	Decodes a triangle strip back into triangles, alternating the winding per triangle
	and skipping degenerate ones.

	Returns:
	- list: (i0, i1, i2) tuples.
	"""
	triangles = []
	flip = reversed
	for i in range(len(indexes) - 2):
		i0, i1, i2 = indexes[i], indexes[i + 1], indexes[i + 2]
		if not is_degenerate(i0, i1, i2):
			triangles.append((i1, i0, i2) if flip else (i0, i1, i2))
		flip = not flip
	return triangles
