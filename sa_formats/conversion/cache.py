# -------------------------------------------------------------------------------------------------
class CachedVertex:
	"""
	A vertex as seen by the chunk converter. Optional fields that are absent are None, and
	None only ever equals None, so a vertex without uv never matches one with uv.
	"""

	__slots__ = ('position', 'normal', 'color', 'uv')

	# ---------------------------------------------------------------------------------------------
	def __init__(self, position, normal=None, color=None, uv=None):
		self.position = tuple(position)
		self.normal = None if normal is None else tuple(normal)
		self.color = None if color is None else tuple(color)
		self.uv = None if uv is None else tuple(uv)

	# ---------------------------------------------------------------------------------------------
	def key(self):
		return (self.position, self.normal, self.color, self.uv)

	# ---------------------------------------------------------------------------------------------
	def __eq__(self, other):
		if not isinstance(other, CachedVertex):
			return NotImplemented
		return self.key() == other.key()

	# ---------------------------------------------------------------------------------------------
	def __hash__(self):
		return hash(self.key())

	# ---------------------------------------------------------------------------------------------
	def __repr__(self):
		return F"CachedVertex(position={self.position}, normal={self.normal}, color={self.color}, uv={self.uv})"


# -------------------------------------------------------------------------------------------------
class VertexCache:
	"""
	Append-only vertex deduplication for a single attach conversion.

	Indices are handed out densely in first-seen order and never change once assigned,
	so feeding the same vertices in the same order always gives the same indices.
	"""

	# ---------------------------------------------------------------------------------------------
	def __init__(self):
		self.entries = []
		self.lookup = {}

	# ---------------------------------------------------------------------------------------------
	def __len__(self):
		return len(self.entries)

	# ---------------------------------------------------------------------------------------------
	def __iter__(self):
		return iter(self.entries)

	# ---------------------------------------------------------------------------------------------
	def __getitem__(self, index):
		return self.entries[index]

	# ---------------------------------------------------------------------------------------------
	def intern(self, vertex):
		index = self.lookup.get(vertex)
		if index is None:
			index = len(self.entries)
			self.entries.append(vertex)
			self.lookup[vertex] = index
		return index
