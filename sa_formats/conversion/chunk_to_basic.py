from sa_formats.shared.enums import (
	BasicPolyType,
	ChunkType,
	is_chunk_type_tiny,
	is_chunk_type_material,
	strip_has_uv,
	strip_has_color,
)
from sa_formats.shared.error import (
	ConversionError,
	UnexpectedChunkVariant,
	print_debug_message,
)
from sa_formats.graphics.basic import BasicAttach, MeshSet, Strip
from sa_formats.graphics.material import Material
from sa_formats.graphics.chunk import PolyChunkStrip

# --- notes ---------------------------------------------------------------------------------------
# - vertex chunks are placed in one global vertex space at their index offset
# - state chunks update a single running material, every strip chunk becomes one mesh
#   that gets its own copy of that material, unset fields carry over to the next mesh
# - the final vertex array runs from the start of the vertex chunk holding the lowest referenced
#   index up to the highest referenced index, indices are rebased to it
# - vertex colors of vertex chunks are not carried over, only strip colors are


# -------------------------------------------------------------------------------------------------
class VertexArena:
	"""
	Grow-only buffer addressed by absolute vertex index. Growing fills the gap with zeros.
	"""

	# ---------------------------------------------------------------------------------------------
	def __init__(self, fill=(0.0, 0.0, 0.0)):
		self.items = []
		self.fill = fill

	# ---------------------------------------------------------------------------------------------
	def __len__(self):
		return len(self.items)

	# ---------------------------------------------------------------------------------------------
	def reserve(self, size):
		if size > len(self.items):
			self.items.extend([self.fill] * (size - len(self.items)))

	# ---------------------------------------------------------------------------------------------
	def write(self, offset, values):
		values = list(values)
		self.reserve(offset + len(values))
		self.items[offset:offset + len(values)] = values

	# ---------------------------------------------------------------------------------------------
	def slice(self, start, count):
		return list(self.items[start:start + count])


# -------------------------------------------------------------------------------------------------
class StripBounds:

	# ---------------------------------------------------------------------------------------------
	def __init__(self):
		self.minimum = None
		self.maximum = None

	# ---------------------------------------------------------------------------------------------
	def update(self, indexes):
		if not indexes:
			return
		low, high = min(indexes), max(indexes)
		self.minimum = low if self.minimum is None else min(self.minimum, low)
		self.maximum = high if self.maximum is None else max(self.maximum, high)

	# ---------------------------------------------------------------------------------------------
	def anchor(self, offset):
		# the range starts at the vertex chunk that holds its first vertex
		if not self.is_empty():
			self.minimum = min(self.minimum, offset)

	# ---------------------------------------------------------------------------------------------
	def is_empty(self):
		return self.minimum is None

	# ---------------------------------------------------------------------------------------------
	def get_count(self):
		return 0 if self.is_empty() else self.maximum - self.minimum + 1


# -------------------------------------------------------------------------------------------------
def apply_texture_chunk(material, chunk):
	material.clamp_u = chunk.clamp_u
	material.clamp_v = chunk.clamp_v
	material.filter_mode = chunk.filter_mode
	material.flip_u = chunk.flip_u
	material.flip_v = chunk.flip_v
	material.super_sample = chunk.super_sample
	material.texture_id = chunk.texture_id


# -------------------------------------------------------------------------------------------------
def apply_material_chunk(material, chunk):
	material.source_alpha = chunk.source_alpha
	material.destination_alpha = chunk.destination_alpha
	if chunk.diffuse is not None:
		material.diffuse = chunk.diffuse
	if chunk.specular is not None:
		material.specular = chunk.specular
		material.exponent = float(chunk.specular_exponent)


# -------------------------------------------------------------------------------------------------
def apply_strip_flags(material, chunk):
	material.double_sided = chunk.double_side
	material.environment_map = chunk.environment_mapping
	material.flat_shading = chunk.flat_shading
	material.ignore_lighting = chunk.ignore_light
	material.ignore_specular = chunk.ignore_specular
	material.use_alpha = chunk.use_alpha


# -------------------------------------------------------------------------------------------------
def build_strip_mesh(chunk, material_id, bounds):
	has_uv = strip_has_uv(chunk.type)
	has_vcolor = strip_has_color(chunk.type)
	strips = []
	uvs = [] if has_uv else None
	vcolors = [] if has_vcolor else None
	for entry in chunk.strips:
		bounds.update(entry.indexes)
		# copy the indices, rebasing later must not touch the source chunk
		strips.append(Strip(list(entry.indexes), entry.reversed))
		if has_uv:
			if entry.uvs is None or len(entry.uvs) != len(entry.indexes):
				raise ConversionError(F"Strip chunk `{chunk.type.name}` is missing uv data...")
			uvs.extend(entry.uvs)
		if has_vcolor:
			if entry.vcolors is None or len(entry.vcolors) != len(entry.indexes):
				raise ConversionError(F"Strip chunk `{chunk.type.name}` is missing vertex colors...")
			vcolors.extend(entry.vcolors)
	return MeshSet(BasicPolyType.STRIPS, strips, material_id, uv=uvs, vcolor=vcolors)


# -------------------------------------------------------------------------------------------------
def chunk_to_basic(attach, params={}, name=None):
	"""
	Converts a chunk attach into a basic attach with one mesh and material per strip chunk.

	Args:
	- attach (ChunkAttach): the source attach, left untouched.
	- params (dict): conversion parameters, only `debug` is used.
	- name (str): name of the new attach, defaults to the source name.

	Returns:
	- BasicAttach: the converted attach, with a tight zero-based vertex array.
	"""
	params = {'debug': False} | params
	result = BasicAttach(attach.name if name is None else name, attach.bounds)

	vertices = VertexArena()
	normals = VertexArena()
	has_normals = False
	for chunk in attach.vertex:
		vertices.write(chunk.index_offset, chunk.vertices)
		normals.reserve(len(vertices))
		if chunk.normals:
			has_normals = True
			normals.write(chunk.index_offset, chunk.normals)

	material = Material(use_texture=True)
	bounds = StripBounds()

	for chunk in attach.poly:
		chunk_type = chunk.type
		if chunk_type == ChunkType.BITS_BLEND_ALPHA:
			material.source_alpha = chunk.source_alpha
			material.destination_alpha = chunk.destination_alpha
		elif chunk_type == ChunkType.BITS_SPECULAR_EXPONENT:
			material.exponent = float(chunk.specular_exponent)
		elif is_chunk_type_tiny(chunk_type):
			apply_texture_chunk(material, chunk)
		elif is_chunk_type_material(chunk_type):
			apply_material_chunk(material, chunk)
		elif isinstance(chunk, PolyChunkStrip):
			apply_strip_flags(material, chunk)
			mesh_index = len(result.mesh)
			try:
				mesh = build_strip_mesh(chunk, mesh_index, bounds)
			except ConversionError as exception:
				raise exception.with_context(attach.name, mesh_index) from exception
			result.mesh.append(mesh)
			result.material.append(material)
			material = material.copy()
		elif ChunkType.STRIP_STRIP <= chunk_type < ChunkType.END:
			raise UnexpectedChunkVariant(F"Unsupported strip chunk type `{chunk_type:#04x}`...", attach.name, len(result.mesh))
		else:
			# mipmap adjust, polygon lists and anything newer don't affect the meshes
			print_debug_message(params, F"'{attach.name}' skipping poly chunk {chunk!r}")

	if bounds.is_empty():
		print_debug_message(params, F"'{attach.name}' has no strips, leaving the vertex array empty")
		return result

	if bounds.maximum >= len(vertices):
		raise ConversionError(F"Strips reference vertex {bounds.maximum} but there are only {len(vertices)}...", attach.name)

	for chunk in attach.vertex:
		if chunk.index_offset <= bounds.minimum < chunk.index_offset + chunk.get_vertex_count():
			bounds.anchor(chunk.index_offset)

	count = bounds.get_count()
	result.vertex = vertices.slice(bounds.minimum, count)
	result.normal = normals.slice(bounds.minimum, count) if has_normals else []

	for mesh in result.mesh:
		for poly in mesh.polys:
			poly.indexes = [index - bounds.minimum for index in poly.indexes]

	print_debug_message(params, F"'{attach.name}' rebased {len(result.mesh)} meshes by {bounds.minimum} over {count} vertices")

	return result
