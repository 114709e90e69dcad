from . basic import Bounds, BasicAttach, MeshSet, Triangle, Quad, Strip
from . material import Material
from . chunk import ChunkAttach, VertexChunk
from . landtable import LandTable, COL, Model
