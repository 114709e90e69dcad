import pytest

from sa_formats.shared.error import StripGenerationFailed
from sa_formats.conversion.stripify import (
	PrimitiveGroup,
	PrimitiveType,
	generate_strips,
	triangulate_quads,
	strip_to_triangles,
)


# -------------------------------------------------------------------------------------------------
def one_strip_per_triangle(indices):
	return [PrimitiveGroup(PrimitiveType.TRIANGLE_STRIP, indices[i:i + 3]) for i in range(0, len(indices), 3)]


# -------------------------------------------------------------------------------------------------
def rotate_to_lowest(triangle):
	# same triangle, same winding, lowest entry first
	i = triangle.index(min(triangle))
	return tuple(triangle[i:]) + tuple(triangle[:i])


# -------------------------------------------------------------------------------------------------
def triangle_soup(strips):
	return {rotate_to_lowest(t) for strip in strips for t in strip_to_triangles(strip.indexes, strip.reversed)}


# -------------------------------------------------------------------------------------------------
def test_triangulate_quad():
	assert triangulate_quads([[10, 11, 12, 13]]) == [10, 11, 12, 12, 11, 13]


# -------------------------------------------------------------------------------------------------
def test_triangulate_quads_keeps_order():
	assert triangulate_quads([(0, 1, 2, 3), (4, 5, 6, 7)]) == [0, 1, 2, 2, 1, 3, 4, 5, 6, 6, 5, 7]


# -------------------------------------------------------------------------------------------------
def test_strip_to_triangles_alternates_winding():
	assert strip_to_triangles([0, 1, 2, 3, 4]) == [(0, 1, 2), (2, 1, 3), (2, 3, 4)]
	assert strip_to_triangles([0, 1, 2, 3], reversed=True) == [(1, 0, 2), (1, 2, 3)]


# -------------------------------------------------------------------------------------------------
def test_strip_to_triangles_skips_degenerates():
	# the triangle after the degenerate pair sits at an odd position and flips
	assert strip_to_triangles([0, 1, 2, 2, 3, 4]) == [(0, 1, 2), (3, 2, 4)]


# -------------------------------------------------------------------------------------------------
def test_generate_strips_with_custom_generator():
	strips = generate_strips([0, 1, 2, 2, 1, 3], one_strip_per_triangle)
	assert [s.indexes for s in strips] == [[0, 1, 2], [2, 1, 3]]
	assert all(s.reversed is False for s in strips)


# -------------------------------------------------------------------------------------------------
def test_generate_strips_empty_input():
	assert generate_strips([], one_strip_per_triangle) == []


# -------------------------------------------------------------------------------------------------
def test_generate_strips_with_pyffi():
	# 2x2 grid of quads
	indices = triangulate_quads([(0, 1, 3, 4), (1, 2, 4, 5), (3, 4, 6, 7), (4, 5, 7, 8)])
	strips = generate_strips(indices)
	assert len(strips) > 0
	expected = {rotate_to_lowest(indices[i:i + 3]) for i in range(0, len(indices), 3)}
	assert triangle_soup(strips) == expected


# -------------------------------------------------------------------------------------------------
def test_generator_error_is_fatal():
	def broken(indices):
		raise RuntimeError('nope')
	with pytest.raises(StripGenerationFailed):
		generate_strips([0, 1, 2], broken)


# -------------------------------------------------------------------------------------------------
def test_generator_without_strips_is_fatal():
	with pytest.raises(StripGenerationFailed):
		generate_strips([0, 1, 2], lambda indices: [])


# -------------------------------------------------------------------------------------------------
def test_generator_with_wrong_primitive_type_is_fatal():
	def triangle_list(indices):
		return [PrimitiveGroup(PrimitiveType.TRIANGLE_LIST, indices)]
	with pytest.raises(StripGenerationFailed):
		generate_strips([0, 1, 2], triangle_list)


# -------------------------------------------------------------------------------------------------
def test_incomplete_triangle_list_is_fatal():
	with pytest.raises(StripGenerationFailed):
		generate_strips([0, 1], one_strip_per_triangle)


# -------------------------------------------------------------------------------------------------
def test_indices_outside_uint16_are_fatal():
	with pytest.raises(StripGenerationFailed):
		generate_strips([0, 1, 0x10000], one_strip_per_triangle)
