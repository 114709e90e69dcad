from sa_formats.shared.enums import (
	BasicPolyType,
	ChunkType,
	vertex_has_normal,
	vertex_has_diffuse,
)
from sa_formats.shared.error import (
	ConversionError,
	print_warning_message,
	print_debug_message,
)
from sa_formats.graphics.chunk import (
	ChunkAttach,
	VertexChunk,
	PolyChunkTinyTextureID,
	PolyChunkMaterial,
	PolyChunkStrip,
	StripEntry,
)
from sa_formats.graphics.basic import Strip
from sa_formats.conversion.cache import CachedVertex, VertexCache
from sa_formats.conversion.stripify import generate_strips, triangulate_quads

# --- notes ---------------------------------------------------------------------------------------
# - all meshes of an attach share one vertex cache, and so one vertex chunk
# - the vertex chunk kind is picked once for the whole attach
# - triangles and quads are interned with their uv, strips and n-gons without,
#   the uv of a stripified vertex is looked up by its cached index (last one wins)

WHITE = (255, 255, 255, 255)


# -------------------------------------------------------------------------------------------------
def select_vertex_chunk_type(attach):
	has_normal = len(attach.normal) > 0
	has_vcolor = any(mesh.has_vcolor() for mesh in attach.mesh)
	if has_vcolor and has_normal:
		return ChunkType.VERTEX_VERTEX_NORMAL_DIFFUSE8
	elif has_vcolor:
		return ChunkType.VERTEX_VERTEX_DIFFUSE8
	elif has_normal:
		return ChunkType.VERTEX_VERTEX_NORMAL
	return ChunkType.VERTEX_VERTEX


# -------------------------------------------------------------------------------------------------
class MeshInterner:
	"""
	Resolves the polygon corners of basic meshes into the shared vertex cache.
	"""

	# ---------------------------------------------------------------------------------------------
	def __init__(self, attach, cache, vertex_chunk_type):
		self.attach = attach
		self.cache = cache
		self.has_normal = vertex_has_normal(vertex_chunk_type)
		self.has_vcolor = vertex_has_diffuse(vertex_chunk_type)

	# ---------------------------------------------------------------------------------------------
	def intern(self, mesh, index, corner, with_uv):
		if not 0 <= index < len(self.attach.vertex):
			raise ConversionError(F"Polygon references vertex {index} but there are only {len(self.attach.vertex)}...")
		normal = None
		if self.has_normal:
			normal = self.attach.normal[index]
		color = None
		if self.has_vcolor:
			color = self.get_corner_value(mesh.vcolor, corner, 'color') if mesh.has_vcolor() else WHITE
		uv = None
		if with_uv and mesh.has_uv():
			uv = self.get_corner_value(mesh.uv, corner, 'uv')
		return self.cache.intern(CachedVertex(self.attach.vertex[index], normal, color, uv))

	# ---------------------------------------------------------------------------------------------
	@staticmethod
	def get_corner_value(values, corner, what):
		if corner >= len(values):
			raise ConversionError(F"Mesh has {len(values)} {what} entries but polygon corner {corner} needs one...")
		return values[corner]


# -------------------------------------------------------------------------------------------------
def stripify_mesh(mesh, interner, generator=None):
	"""
	Interns every corner of the mesh and returns its strips.

	Returns:
	- list: (Strip, uvs) tuples, uvs is None when the mesh has no uv.
	"""
	result = []
	corner = 0

	if mesh.poly_type in (BasicPolyType.TRIANGLES, BasicPolyType.QUADS):
		size = 3 if mesh.poly_type is BasicPolyType.TRIANGLES else 4
		uvmap = {}
		polys = []
		for poly in mesh.polys:
			if len(poly.indexes) != size:
				raise ConversionError(F"Expected {size} indexes per polygon but got {len(poly.indexes)}...")
			interned = []
			for index in poly.indexes:
				cached = interner.intern(mesh, index, corner, with_uv=True)
				if mesh.has_uv():
					uvmap[cached] = mesh.uv[corner]
				interned.append(cached)
				corner += 1
			polys.append(interned)

		if mesh.poly_type is BasicPolyType.QUADS:
			indices = triangulate_quads(polys)
		else:
			indices = [index for poly in polys for index in poly]

		for strip in generate_strips(indices, generator):
			uvs = [uvmap[index] for index in strip.indexes] if mesh.has_uv() else None
			result.append((strip, uvs))

	else:
		# strips and n-gons are already in strip order
		for poly in mesh.polys:
			indexes = []
			uvs = [] if mesh.has_uv() else None
			for index in poly.indexes:
				indexes.append(interner.intern(mesh, index, corner, with_uv=False))
				if uvs is not None:
					uvs.append(interner.get_corner_value(mesh.uv, corner, 'uv'))
				corner += 1
			result.append((Strip(indexes, getattr(poly, 'reversed', False)), uvs))

	return result


# -------------------------------------------------------------------------------------------------
def build_material_chunks(material):
	chunks = []
	if material.use_texture:
		chunks.append(PolyChunkTinyTextureID(
			ChunkType.TINY_TEXTURE_ID,
			mipmap_d_adjust=material.mipmap_d_adjust,
			clamp_u=material.clamp_u,
			clamp_v=material.clamp_v,
			flip_u=material.flip_u,
			flip_v=material.flip_v,
			super_sample=material.super_sample,
			filter_mode=material.filter_mode,
			texture_id=material.texture_id & 0x1FFF,
		))
	r, g, b, _ = material.specular
	chunks.append(PolyChunkMaterial(
		ChunkType.MATERIAL_DIFFUSE_SPECULAR,
		source_alpha=material.source_alpha,
		destination_alpha=material.destination_alpha,
		diffuse=material.diffuse,
		specular=(r, g, b, 255),
		specular_exponent=int(material.exponent) & 0xFF,
	))
	return chunks


# -------------------------------------------------------------------------------------------------
def build_strip_chunk(mesh, material, strips):
	chunk = PolyChunkStrip(ChunkType.STRIP_STRIP_UVN if mesh.has_uv() else ChunkType.STRIP_STRIP)
	if material is not None:
		chunk.ignore_light = material.ignore_lighting
		chunk.ignore_specular = material.ignore_specular
		chunk.use_alpha = material.use_alpha
		chunk.double_side = material.double_sided
		chunk.flat_shading = material.flat_shading
		chunk.environment_mapping = material.environment_map
	for strip, uvs in strips:
		chunk.strips.append(StripEntry(strip.indexes, strip.reversed, uvs))
	return chunk


# -------------------------------------------------------------------------------------------------
def basic_to_chunk(attach, params={}, generator=None, name=None):
	"""
	Converts a basic attach into a chunk attach with a single deduplicated vertex chunk.

	Args:
	- attach (BasicAttach): the source attach, left untouched.
	- params (dict): conversion parameters, only `debug` is used.
	- generator: optional strip generator, see `stripify.generate_strips`.
	- name (str): name of the new attach, defaults to the source name.

	Returns:
	- ChunkAttach: the converted attach.
	"""
	params = {'debug': False} | params
	result = ChunkAttach(attach.name if name is None else name, attach.bounds)

	vertex_chunk_type = select_vertex_chunk_type(attach)
	cache = VertexCache()
	interner = MeshInterner(attach, cache, vertex_chunk_type)

	strips_per_mesh = []
	for mesh_index, mesh in enumerate(attach.mesh):
		try:
			strips_per_mesh.append(stripify_mesh(mesh, interner, generator))
		except ConversionError as exception:
			raise exception.with_context(attach.name, mesh_index) from exception

	vertex_chunk = VertexChunk(vertex_chunk_type)
	for entry in cache:
		vertex_chunk.vertices.append(entry.position)
		if vertex_chunk.has_normals():
			vertex_chunk.normals.append(entry.normal)
		if vertex_chunk.has_diffuse():
			vertex_chunk.diffuse.append(entry.color)
	vertex_chunk.update_size()
	result.vertex.append(vertex_chunk)

	print_debug_message(params, F"'{attach.name}' interned {len(cache)} of {len(attach.vertex)} vertices as {vertex_chunk_type.name}")

	for mesh_index, mesh in enumerate(attach.mesh):
		material = attach.get_material(mesh)
		if material is None:
			print_warning_message(F"Mesh {mesh_index} of '{attach.name}' references material {mesh.material_id} but there are only {len(attach.material)}, skipping material chunks...")
		else:
			result.poly.extend(build_material_chunks(material))
		result.poly.append(build_strip_chunk(mesh, material, strips_per_mesh[mesh_index]))

	return result
