from . cache import CachedVertex, VertexCache
from . stripify import generate_strips, triangulate_quads, strip_to_triangles
from . basic_to_chunk import basic_to_chunk
from . chunk_to_basic import chunk_to_basic
from . landtable import convert_landtable, filter_visible
