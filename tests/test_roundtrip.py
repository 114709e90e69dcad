from sa_formats.shared.enums import BasicPolyType
from sa_formats.graphics.basic import BasicAttach, MeshSet, Quad, Triangle
from sa_formats.graphics.material import Material
from sa_formats.graphics.chunk import ChunkAttach
from sa_formats.conversion.stripify import strip_to_triangles
from sa_formats.conversion.basic_to_chunk import basic_to_chunk
from sa_formats.conversion.chunk_to_basic import chunk_to_basic


# -------------------------------------------------------------------------------------------------
def make_grid(size=3):
	"""
	A `size` x `size` vertex grid on the xz plane made of quads, uv and normals derived
	from the position so every position has exactly one of each.
	"""
	attach = BasicAttach('grid')
	for y in range(size):
		for x in range(size):
			attach.vertex.append((float(x), 0.0, float(y)))
			attach.normal.append((x * 0.25, 1.0, y * 0.25))
	mesh = MeshSet(BasicPolyType.QUADS, uv=[])
	for y in range(size - 1):
		for x in range(size - 1):
			a = y * size + x
			quad = Quad([a, a + 1, a + size, a + size + 1])
			mesh.polys.append(quad)
			for index in quad.indexes:
				vx, _, vz = attach.vertex[index]
				mesh.uv.append((vx, vz))
	attach.mesh.append(mesh)
	attach.material.append(Material(use_texture=True, texture_id=3, diffuse=(200, 100, 50, 255)))
	return attach


# -------------------------------------------------------------------------------------------------
def rotate_to_lowest(triangle):
	# same triangle, same winding, lowest position first
	i = triangle.index(min(triangle))
	return tuple(triangle[i:]) + tuple(triangle[:i])


# -------------------------------------------------------------------------------------------------
def source_triangles(attach):
	triangles = set()
	for mesh in attach.mesh:
		for poly in mesh.polys:
			if mesh.poly_type is BasicPolyType.QUADS:
				a, b, c, d = poly.indexes
				faces = [(a, b, c), (c, b, d)]
			else:
				faces = [tuple(poly.indexes)]
			for face in faces:
				triangles.add(rotate_to_lowest([attach.vertex[i] for i in face]))
	return triangles


# -------------------------------------------------------------------------------------------------
def strip_triangles(attach):
	triangles = set()
	for mesh in attach.mesh:
		for poly in mesh.polys:
			for face in strip_to_triangles(poly.indexes, poly.reversed):
				triangles.add(rotate_to_lowest([attach.vertex[i] for i in face]))
	return triangles


# -------------------------------------------------------------------------------------------------
def test_roundtrip_keeps_geometry():
	source = make_grid()
	chunk = basic_to_chunk(source)
	result = chunk_to_basic(chunk)

	assert strip_triangles(result) == source_triangles(source)
	assert len(result.vertex) == len(source.vertex)


# -------------------------------------------------------------------------------------------------
def test_roundtrip_keeps_attributes():
	source = make_grid(4)
	chunk = basic_to_chunk(source)
	# through the binary streams as well
	chunk = ChunkAttach.from_json(chunk.to_json())
	result = chunk_to_basic(chunk)

	source_normals = dict(zip(source.vertex, source.normal))
	result_normals = dict(zip(result.vertex, result.normal))
	assert result_normals == source_normals

	mesh = result.mesh[0]
	corners = [index for poly in mesh.polys for index in poly.indexes]
	assert len(mesh.uv) == len(corners)
	for index, uv in zip(corners, mesh.uv):
		x, _, z = result.vertex[index]
		assert uv == (x, z)

	material = result.material[0]
	assert material.texture_id == 3
	assert material.diffuse == (200, 100, 50, 255)
	assert material.use_texture


# -------------------------------------------------------------------------------------------------
def test_roundtrip_of_triangles_without_uv():
	source = BasicAttach('fan')
	source.vertex = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0), (-1.0, 1.0, 0.0), (-1.0, 0.0, 0.0)]
	source.mesh = [MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2]), Triangle([0, 2, 3]), Triangle([0, 3, 4]), Triangle([0, 4, 5])])]
	source.material = [Material()]

	chunk = basic_to_chunk(source)
	assert chunk.vertex[0].get_vertex_count() == 6

	result = chunk_to_basic(chunk)
	assert strip_triangles(result) == source_triangles(source)
	assert result.normal == []
	assert result.mesh[0].uv is None
