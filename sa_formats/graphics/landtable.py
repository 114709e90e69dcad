import json
from pathlib import Path

from sa_formats.shared.enums import LandTableFormat, SurfaceFlags
from sa_formats.graphics.basic import Bounds, BasicAttach
from sa_formats.graphics.chunk import ChunkAttach

# -------------------------------------------------------------------------------------------------
# landtables are the level geometry container
# - a list of COL entries, each with surface flags and a model
# - models carry the transform and (optionally) an attach
# - geometry animations, which the converter throws away
# the native level files are handled elsewhere, this is the json interchange form


# -------------------------------------------------------------------------------------------------
def attach_from_json(data):
	if data is None:
		return None
	if data['type'] == 'basic':
		return BasicAttach.from_json(data)
	elif data['type'] == 'chunk':
		return ChunkAttach.from_json(data)
	raise NotImplementedError(F"Unknown attach type `{data['type']}`...")


# -------------------------------------------------------------------------------------------------
class AttachTable:
	"""
	Collects the attaches of a landtable while it is being written. Attaches are keyed by
	identity, so a shared attach is written once, and two different attaches that happen
	to share a name get distinct keys (`name`, `name_1`, ...).
	"""

	# ---------------------------------------------------------------------------------------------
	def __init__(self):
		self.entries = {}
		self.names = {}

	# ---------------------------------------------------------------------------------------------
	def register(self, attach):
		key = id(attach)
		if key not in self.names:
			name = attach.name
			suffix = 1
			while name in self.entries:
				name = F"{attach.name}_{suffix}"
				suffix += 1
			self.entries[name] = attach.to_json()
			self.names[key] = name
		return self.names[key]


# -------------------------------------------------------------------------------------------------
class Model:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, name='', attach=None):
		self.name = name
		self.position = (0.0, 0.0, 0.0)
		self.rotation = (0, 0, 0)
		self.scale = (1.0, 1.0, 1.0)
		self.attach = attach

	# ---------------------------------------------------------------------------------------------
	def copy_transform(self, other):
		self.position = other.position
		self.rotation = other.rotation
		self.scale = other.scale

	# ---------------------------------------------------------------------------------------------
	def to_json(self, attaches):
		result = {
			'name': self.name,
			'position': list(self.position),
			'rotation': list(self.rotation),
			'scale': list(self.scale),
			'attach': None,
		}
		# attaches are written once in the table and referenced by key
		if self.attach is not None:
			result['attach'] = attaches.register(self.attach)
		return result

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_json(cls, data, attaches):
		model = cls(data.get('name', ''))
		model.position = tuple(data.get('position', model.position))
		model.rotation = tuple(data.get('rotation', model.rotation))
		model.scale = tuple(data.get('scale', model.scale))
		if data.get('attach') is not None:
			model.attach = attaches[data['attach']]
		return model


# -------------------------------------------------------------------------------------------------
class COL:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, model=None, surface_flags=SurfaceFlags.NONE, bounds=None):
		self.model = model
		self.surface_flags = SurfaceFlags(surface_flags)
		self.bounds = Bounds() if bounds is None else bounds

	# ---------------------------------------------------------------------------------------------
	def get_attach(self):
		return None if self.model is None else self.model.attach

	# ---------------------------------------------------------------------------------------------
	def to_json(self, attaches):
		return {
			'bounds': self.bounds.to_json(),
			'surface_flags': int(self.surface_flags),
			'model': None if self.model is None else self.model.to_json(attaches),
		}

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_json(cls, data, attaches):
		col = cls(surface_flags=data.get('surface_flags', 0))
		if 'bounds' in data:
			col.bounds = Bounds.from_json(data['bounds'])
		if data.get('model') is not None:
			col.model = Model.from_json(data['model'], attaches)
		return col


# -------------------------------------------------------------------------------------------------
class LandTable:

	# ---------------------------------------------------------------------------------------------
	def __init__(self, format=LandTableFormat.SA1):
		self.format = format
		self.cols = []
		self.anims = []

	# ---------------------------------------------------------------------------------------------
	def to_json(self):
		attaches = AttachTable()
		cols = [col.to_json(attaches) for col in self.cols]
		return {
			'format': self.format.value,
			'attaches': attaches.entries,
			'cols': cols,
			'anims': self.anims,
		}

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_json(cls, data):
		landtable = cls(LandTableFormat(data['format']))
		attaches = {name: attach_from_json(attach) for name, attach in data.get('attaches', {}).items()}
		landtable.cols = [COL.from_json(col, attaches) for col in data.get('cols', [])]
		landtable.anims = list(data.get('anims', []))
		return landtable

	# ---------------------------------------------------------------------------------------------
	@classmethod
	def from_file(cls, filename):
		pathname = Path(filename).resolve()
		if not pathname.exists():
			raise FileNotFoundError(F"File does not exist... '{pathname}'")
		with open(pathname, 'r') as inp:
			return cls.from_json(json.load(inp))

	# ---------------------------------------------------------------------------------------------
	def to_file(self, filename):
		pathname = Path(filename).resolve()
		pathname.parent.mkdir(exist_ok=True, parents=True)
		# the file is only opened once the whole table has serialized
		data = self.to_json()
		with open(pathname, 'w') as out:
			json.dump(data, out, indent=4)
		return True
