import pytest

from sa_formats.shared.enums import BasicPolyType, ChunkType
from sa_formats.shared.error import ConversionError, StripGenerationFailed
from sa_formats.graphics.basic import BasicAttach, MeshSet, Triangle, Quad, Strip
from sa_formats.graphics.material import Material
from sa_formats.graphics.chunk import (
	PolyChunkTinyTextureID,
	PolyChunkMaterial,
	PolyChunkStrip,
)
from sa_formats.conversion.stripify import PrimitiveGroup, PrimitiveType
from sa_formats.conversion.basic_to_chunk import basic_to_chunk, select_vertex_chunk_type


# -------------------------------------------------------------------------------------------------
def one_strip_per_triangle(indices):
	return [PrimitiveGroup(PrimitiveType.TRIANGLE_STRIP, indices[i:i + 3]) for i in range(0, len(indices), 3)]


# -------------------------------------------------------------------------------------------------
class RecordingGenerator:

	def __init__(self):
		self.calls = []

	def __call__(self, indices):
		self.calls.append(list(indices))
		return one_strip_per_triangle(indices)


# -------------------------------------------------------------------------------------------------
def make_attach(vertex_count=4, normals=False):
	attach = BasicAttach('test')
	attach.vertex = [(float(i), float(i % 2), 0.0) for i in range(vertex_count)]
	if normals:
		attach.normal = [(0.0, 1.0, 0.0)] * vertex_count
	return attach


# -------------------------------------------------------------------------------------------------
def test_quad_interns_four_vertices():
	attach = make_attach(14)
	attach.mesh = [MeshSet(BasicPolyType.QUADS, [Quad([10, 11, 12, 13])])]
	attach.material = [Material()]
	generator = RecordingGenerator()

	result = basic_to_chunk(attach, generator=generator)

	assert len(generator.calls) == 1
	assert generator.calls[0] == [0, 1, 2, 2, 1, 3]
	assert len(result.vertex) == 1
	assert result.vertex[0].vertices == attach.vertex[10:14]
	assert result.vertex[0].index_offset == 0


# -------------------------------------------------------------------------------------------------
def test_vertices_are_shared_between_meshes():
	attach = make_attach(4)
	attach.mesh = [
		MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2])]),
		MeshSet(BasicPolyType.TRIANGLES, [Triangle([2, 1, 3])]),
	]
	attach.material = [Material()]
	result = basic_to_chunk(attach, generator=one_strip_per_triangle)
	assert result.vertex[0].get_vertex_count() == 4
	strips = [chunk for chunk in result.poly if isinstance(chunk, PolyChunkStrip)]
	assert [entry.indexes for entry in strips[1].strips] == [[2, 1, 3]]


# -------------------------------------------------------------------------------------------------
def test_emission_order():
	attach = make_attach(3)
	attach.mesh = [
		MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2])], material_id=0),
		MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2])], material_id=1),
	]
	attach.material = [Material(use_texture=True, texture_id=9), Material(diffuse=(1, 2, 3, 4))]
	result = basic_to_chunk(attach, generator=one_strip_per_triangle)

	assert [type(chunk) for chunk in result.poly] == [
		PolyChunkTinyTextureID,
		PolyChunkMaterial,
		PolyChunkStrip,
		PolyChunkMaterial,
		PolyChunkStrip,
	]
	assert result.poly[0].texture_id == 9
	assert result.poly[3].diffuse == (1, 2, 3, 4)
	assert result.poly[3].type is ChunkType.MATERIAL_DIFFUSE_SPECULAR


# -------------------------------------------------------------------------------------------------
def test_material_chunk_carries_blending_and_exponent():
	attach = make_attach(3)
	attach.mesh = [MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2])])]
	attach.material = [Material(specular=(10, 20, 30, 40), exponent=16.0, use_alpha=True, double_sided=True)]
	result = basic_to_chunk(attach, generator=one_strip_per_triangle)

	material, strip = result.poly
	assert material.specular == (10, 20, 30, 255)
	assert material.specular_exponent == 16
	assert strip.use_alpha and strip.double_side
	assert not strip.environment_mapping


# -------------------------------------------------------------------------------------------------
def test_out_of_range_material_skips_state_chunks(capsys):
	attach = make_attach(3)
	attach.mesh = [MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2])], material_id=5)]
	attach.material = [Material()]
	result = basic_to_chunk(attach, generator=one_strip_per_triangle)

	assert len(result.poly) == 1
	assert isinstance(result.poly[0], PolyChunkStrip)
	assert 'WARNING' in capsys.readouterr().out


# -------------------------------------------------------------------------------------------------
def test_uv_selects_the_strip_variant():
	attach = make_attach(4)
	attach.mesh = [
		MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2])], uv=[(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)]),
		MeshSet(BasicPolyType.TRIANGLES, [Triangle([1, 2, 3])]),
	]
	attach.material = [Material()]
	result = basic_to_chunk(attach, generator=one_strip_per_triangle)
	strips = [chunk for chunk in result.poly if isinstance(chunk, PolyChunkStrip)]

	assert strips[0].type is ChunkType.STRIP_STRIP_UVN
	assert strips[0].strips[0].uvs == [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)]
	assert strips[1].type is ChunkType.STRIP_STRIP
	assert strips[1].strips[0].uvs is None


# -------------------------------------------------------------------------------------------------
def test_uv_of_shared_vertices_is_last_write_wins():
	attach = make_attach(4)
	# both triangles share vertex 1 with the same uv, so it interns once
	attach.mesh = [MeshSet(
		BasicPolyType.TRIANGLES,
		[Triangle([0, 1, 2]), Triangle([1, 3, 2])],
		uv=[(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)],
	)]
	attach.material = [Material()]
	result = basic_to_chunk(attach, generator=one_strip_per_triangle)
	strip = result.poly[-1]

	assert result.vertex[0].get_vertex_count() == 4
	assert strip.strips[1].uvs == [(1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


# -------------------------------------------------------------------------------------------------
def test_strips_are_passed_through():
	attach = make_attach(5)
	attach.mesh = [MeshSet(
		BasicPolyType.STRIPS,
		[Strip([4, 3, 2, 1], reversed=True)],
		uv=[(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0)],
	)]
	attach.material = [Material()]
	generator = RecordingGenerator()
	result = basic_to_chunk(attach, generator=generator)
	strip = result.poly[-1]

	assert generator.calls == []
	assert strip.strips[0].indexes == [0, 1, 2, 3]
	assert strip.strips[0].reversed is True
	assert strip.strips[0].uvs == [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0)]
	assert result.vertex[0].vertices == [attach.vertex[4], attach.vertex[3], attach.vertex[2], attach.vertex[1]]


# -------------------------------------------------------------------------------------------------
def test_vertex_chunk_type_selection():
	attach = make_attach(3)
	attach.mesh = [MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2])])]
	assert select_vertex_chunk_type(attach) is ChunkType.VERTEX_VERTEX

	attach.normal = [(0.0, 1.0, 0.0)] * 3
	assert select_vertex_chunk_type(attach) is ChunkType.VERTEX_VERTEX_NORMAL

	attach.mesh.append(MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2])], vcolor=[(1, 2, 3, 4)] * 3))
	assert select_vertex_chunk_type(attach) is ChunkType.VERTEX_VERTEX_NORMAL_DIFFUSE8

	attach.normal = []
	assert select_vertex_chunk_type(attach) is ChunkType.VERTEX_VERTEX_DIFFUSE8


# -------------------------------------------------------------------------------------------------
def test_vertex_colors_default_to_white():
	attach = make_attach(4, normals=True)
	attach.mesh = [
		MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2])], vcolor=[(255, 0, 0, 255)] * 3),
		MeshSet(BasicPolyType.TRIANGLES, [Triangle([1, 2, 3])]),
	]
	attach.material = [Material()]
	result = basic_to_chunk(attach, generator=one_strip_per_triangle)
	vertex = result.vertex[0]

	assert vertex.type is ChunkType.VERTEX_VERTEX_NORMAL_DIFFUSE8
	# vertices 1 and 2 are interned again because their colors differ
	assert vertex.get_vertex_count() == 6
	assert vertex.diffuse == [(255, 0, 0, 255)] * 3 + [(255, 255, 255, 255)] * 3
	assert vertex.normals == [(0.0, 1.0, 0.0)] * 6
	assert vertex.update_size() == 6 * 7 + 1


# -------------------------------------------------------------------------------------------------
def test_name_and_bounds():
	attach = make_attach(3)
	attach.mesh = [MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2])])]
	result = basic_to_chunk(attach, generator=one_strip_per_triangle, name='test_cnk')
	assert result.name == 'test_cnk'
	assert result.bounds == attach.bounds


# -------------------------------------------------------------------------------------------------
def test_bad_vertex_index_reports_context():
	attach = make_attach(3)
	attach.mesh = [
		MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2])]),
		MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 7])]),
	]
	with pytest.raises(ConversionError) as e:
		basic_to_chunk(attach, generator=one_strip_per_triangle)
	assert e.value.attach == 'test'
	assert e.value.mesh == 1


# -------------------------------------------------------------------------------------------------
def test_strip_generation_failure_aborts():
	def broken(indices):
		raise RuntimeError('nope')

	attach = make_attach(3)
	attach.mesh = [MeshSet(BasicPolyType.TRIANGLES, [Triangle([0, 1, 2])])]
	with pytest.raises(StripGenerationFailed) as e:
		basic_to_chunk(attach, generator=broken)
	assert e.value.mesh == 0


# -------------------------------------------------------------------------------------------------
def test_source_attach_is_untouched():
	attach = make_attach(4)
	attach.mesh = [MeshSet(BasicPolyType.QUADS, [Quad([0, 1, 2, 3])])]
	attach.material = [Material()]
	basic_to_chunk(attach, generator=one_strip_per_triangle)
	assert attach.mesh[0].polys[0].indexes == [0, 1, 2, 3]
	assert len(attach.vertex) == 4
