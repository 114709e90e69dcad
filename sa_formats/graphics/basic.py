from sa_formats.shared.enums import BasicPolyType
from sa_formats.graphics.material import Material

# -------------------------------------------------------------------------------------------------
# basic attaches are the flat representation:
# - one vertex and one normal array shared by every mesh
# - each mesh holds a single kind of polygon and references one material
# - uv and vertex colors are stored per polygon corner, in polygon order


# -------------------------------------------------------------------------------------------------
class Bounds:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, center=(0.0, 0.0, 0.0), radius=0.0):
		self.center = tuple(center)
		self.radius = radius

	# ---------------------------------------------------------------------------------------------
	def __eq__(self, other):
		if not isinstance(other, Bounds):
			return NotImplemented
		return self.center == other.center and self.radius == other.radius

	# ---------------------------------------------------------------------------------------------
	def to_json(self):
		return {'center': list(self.center), 'radius': self.radius}

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_json(cls, data):
		return cls(tuple(data['center']), data['radius'])


# -------------------------------------------------------------------------------------------------
class Poly:

	size = None

	# ---------------------------------------------------------------------------------------------
	def __init__(self, indexes):
		self.indexes = list(indexes)
		if self.size is not None and len(self.indexes) != self.size:
			raise ValueError(F"{type(self).__name__} expects {self.size} indexes but got {len(self.indexes)}...")

	# ---------------------------------------------------------------------------------------------
	def __repr__(self):
		return F"{type(self).__name__}({self.indexes})"

	# ---------------------------------------------------------------------------------------------
	def to_json(self):
		return {'indexes': self.indexes}


# -------------------------------------------------------------------------------------------------
class Triangle(Poly):
	size = 3


# -------------------------------------------------------------------------------------------------
class Quad(Poly):
	size = 4


# -------------------------------------------------------------------------------------------------
class Strip(Poly):

	# ---------------------------------------------------------------------------------------------
	def __init__(self, indexes, reversed=False):
		super().__init__(indexes)
		self.reversed = reversed

	# ---------------------------------------------------------------------------------------------
	def __repr__(self):
		return F"Strip({self.indexes}, reversed={self.reversed})"

	# ---------------------------------------------------------------------------------------------
	def to_json(self):
		return {'indexes': self.indexes, 'reversed': self.reversed}


# -------------------------------------------------------------------------------------------------
def poly_from_json(poly_type, data):
	if poly_type is BasicPolyType.TRIANGLES:
		return Triangle(data['indexes'])
	elif poly_type is BasicPolyType.QUADS:
		return Quad(data['indexes'])
	return Strip(data['indexes'], data.get('reversed', False))


# -------------------------------------------------------------------------------------------------
class MeshSet:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, poly_type=BasicPolyType.TRIANGLES, polys=None, material_id=0, uv=None, vcolor=None):
		self.poly_type = BasicPolyType(poly_type)
		self.polys = [] if polys is None else list(polys)
		self.material_id = material_id
		self.uv = uv
		self.vcolor = vcolor

	# ---------------------------------------------------------------------------------------------
	def has_uv(self):
		return self.uv is not None

	# ---------------------------------------------------------------------------------------------
	def has_vcolor(self):
		return self.vcolor is not None

	# ---------------------------------------------------------------------------------------------
	def to_json(self):
		result = {
			'poly_type': self.poly_type.name,
			'material_id': self.material_id,
			'polys': [poly.to_json() for poly in self.polys],
		}
		if self.uv is not None:
			result['uv'] = [list(uv) for uv in self.uv]
		if self.vcolor is not None:
			result['vcolor'] = [list(color) for color in self.vcolor]
		return result

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_json(cls, data):
		poly_type = BasicPolyType[data['poly_type']]
		mesh = cls(poly_type, material_id=data.get('material_id', 0))
		mesh.polys = [poly_from_json(poly_type, poly) for poly in data['polys']]
		if 'uv' in data:
			mesh.uv = [tuple(uv) for uv in data['uv']]
		if 'vcolor' in data:
			mesh.vcolor = [tuple(color) for color in data['vcolor']]
		return mesh


# -------------------------------------------------------------------------------------------------
class BasicAttach:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, name='', bounds=None):
		self.name = name
		self.bounds = Bounds() if bounds is None else bounds
		self.vertex = []
		self.normal = []
		self.mesh = []
		self.material = []

	# ---------------------------------------------------------------------------------------------
	def get_material(self, mesh):
		"""
		Returns the material referenced by the mesh, or None when the index points outside
		the material table.
		"""
		if self.material and 0 <= mesh.material_id < len(self.material):
			return self.material[mesh.material_id]
		return None

	# ---------------------------------------------------------------------------------------------
	def to_json(self):
		return {
			'type': 'basic',
			'name': self.name,
			'bounds': self.bounds.to_json(),
			'vertex': [list(v) for v in self.vertex],
			'normal': [list(n) for n in self.normal],
			'mesh': [mesh.to_json() for mesh in self.mesh],
			'material': [material.to_json() for material in self.material],
		}

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_json(cls, data):
		attach = cls(data.get('name', ''), Bounds.from_json(data['bounds']) if 'bounds' in data else None)
		attach.vertex = [tuple(v) for v in data.get('vertex', [])]
		attach.normal = [tuple(n) for n in data.get('normal', [])]
		attach.mesh = [MeshSet.from_json(mesh) for mesh in data.get('mesh', [])]
		attach.material = [Material.from_json(material) for material in data.get('material', [])]
		return attach
