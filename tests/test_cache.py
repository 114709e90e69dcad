import itertools

from sa_formats.conversion.cache import CachedVertex, VertexCache


# -------------------------------------------------------------------------------------------------
def make_vertex(i, uv=None):
	return CachedVertex((float(i), 0.0, 0.0), (0.0, 1.0, 0.0), (255, 255, 255, 255), uv)


# -------------------------------------------------------------------------------------------------
def test_intern_returns_existing_index():
	cache = VertexCache()
	assert cache.intern(make_vertex(0)) == 0
	assert cache.intern(make_vertex(1)) == 1
	assert cache.intern(make_vertex(0)) == 0
	assert cache.intern(make_vertex(2)) == 2
	assert len(cache) == 3


# -------------------------------------------------------------------------------------------------
def test_intern_first_seen_order():
	cache = VertexCache()
	for i in (5, 3, 5, 9, 3):
		cache.intern(make_vertex(i))
	assert [entry.position[0] for entry in cache] == [5.0, 3.0, 9.0]


# -------------------------------------------------------------------------------------------------
def test_intern_is_deterministic():
	sequence = [make_vertex(i % 7, (i % 3 / 2.0, 0.0)) for i in range(50)]
	first = VertexCache()
	second = VertexCache()
	assert [first.intern(v) for v in sequence] == [second.intern(v) for v in sequence]


# -------------------------------------------------------------------------------------------------
def test_uv_presence_is_part_of_identity():
	cache = VertexCache()
	without_uv = cache.intern(make_vertex(0))
	with_uv = cache.intern(make_vertex(0, (0.0, 0.0)))
	assert without_uv != with_uv
	assert cache.intern(make_vertex(0)) == without_uv
	assert cache.intern(make_vertex(0, (0.0, 0.0))) == with_uv


# -------------------------------------------------------------------------------------------------
def test_absent_fields_do_not_match_defaults():
	cache = VertexCache()
	a = cache.intern(CachedVertex((0.0, 0.0, 0.0)))
	b = cache.intern(CachedVertex((0.0, 0.0, 0.0), normal=(0.0, 0.0, 0.0)))
	c = cache.intern(CachedVertex((0.0, 0.0, 0.0), color=(0, 0, 0, 0)))
	assert len({a, b, c}) == 3


# -------------------------------------------------------------------------------------------------
def test_distinct_count_matches_distinct_tuples():
	vertices = [
		CachedVertex((float(i % 4), 0.0, 0.0), None, (i % 2, 0, 0, 255), (0.0, 1.0) if i % 3 else None)
		for i in range(48)
	]
	cache = VertexCache()
	indices = [cache.intern(v) for v in vertices]
	assert len(set(indices)) == len({v.key() for v in vertices})
	assert len(cache) == len(set(indices))


# -------------------------------------------------------------------------------------------------
def test_fan_interns_six_vertices_in_any_order():
	positions = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0), (-1.0, 1.0, 0.0), (-1.0, 0.0, 0.0)]
	triangles = [(0, 1, 2), (0, 2, 3), (0, 3, 4), (0, 4, 5)]
	for order in itertools.permutations(triangles):
		cache = VertexCache()
		for triangle in order:
			for index in triangle:
				cache.intern(CachedVertex(positions[index]))
		assert len(cache) == 6
