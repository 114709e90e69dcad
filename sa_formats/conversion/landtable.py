from sa_formats.shared.enums import LandTableFormat, SurfaceFlags
from sa_formats.shared.error import ConversionError, print_debug_message
from sa_formats.graphics.basic import BasicAttach
from sa_formats.graphics.chunk import ChunkAttach
from sa_formats.graphics.landtable import LandTable, COL, Model
from sa_formats.conversion.basic_to_chunk import basic_to_chunk
from sa_formats.conversion.chunk_to_basic import chunk_to_basic

# --- notes ---------------------------------------------------------------------------------------
# - sa1 -> sa2: only visible entries get chunk geometry, and they lose every other surface flag;
#   entries with other flags stay behind with their basic geometry as invisible collision
# - sa2 -> sa1: every chunk attach is replaced, flags stay as they are
# - geometry animations are not converted, the output has none
# - any failure aborts the whole landtable, there is no partial output

CHUNK_SUFFIX = '_cnk'


# -------------------------------------------------------------------------------------------------
def has_attach(col):
	return col.get_attach() is not None


# -------------------------------------------------------------------------------------------------
def is_visible(col):
	return bool(int(col.surface_flags) & int(SurfaceFlags.VISIBLE))


# -------------------------------------------------------------------------------------------------
def has_collision_flags(col):
	return bool(int(col.surface_flags) & ~int(SurfaceFlags.VISIBLE) & 0xFFFFFFFF)


# -------------------------------------------------------------------------------------------------
def is_participating(col):
	"""
	Whether the entry's geometry gets converted into a new visible entry.
	"""
	return has_attach(col) and is_visible(col)


# -------------------------------------------------------------------------------------------------
def is_passthrough(col):
	"""
	Whether the entry is kept with its original geometry, minus the visible flag.
	"""
	return has_attach(col) and has_collision_flags(col)


# -------------------------------------------------------------------------------------------------
def strip_visible_flag(col):
	flags = int(col.surface_flags) & ~int(SurfaceFlags.VISIBLE) & 0xFFFFFFFF
	return COL(col.model, SurfaceFlags(flags), col.bounds)


# -------------------------------------------------------------------------------------------------
def filter_visible(cols):
	"""
	Splits landtable entries for a basic to chunk conversion.

	Returns:
	- tuple: (participating, passthrough) lists, an entry can be in both or in neither.
	"""
	participating = [col for col in cols if is_participating(col)]
	passthrough = [col for col in cols if is_passthrough(col)]
	return participating, passthrough


# -------------------------------------------------------------------------------------------------
def convert_basic_landtable(landtable, params, generator=None):
	result = LandTable(LandTableFormat.SA2)
	visited = {}

	for col_index, col in enumerate(landtable.cols):
		if not has_attach(col):
			continue

		if is_visible(col):
			attach = col.get_attach()
			if not isinstance(attach, BasicAttach):
				raise ConversionError(F"Entry {col_index} of a basic landtable has a `{type(attach).__name__}`...", attach.name)

			newcol = COL(surface_flags=SurfaceFlags.VISIBLE, bounds=col.bounds)
			newcol.model = Model(col.model.name + CHUNK_SUFFIX)
			newcol.model.copy_transform(col.model)

			newname = attach.name + CHUNK_SUFFIX
			if newname not in visited:
				visited[newname] = basic_to_chunk(attach, params, generator, newname)
			newcol.model.attach = visited[newname]
			result.cols.append(newcol)

		if has_collision_flags(col):
			result.cols.append(strip_visible_flag(col))

	print_debug_message(params, F"Converted {len(visited)} basic attaches into {len(result.cols)} entries")
	return result


# -------------------------------------------------------------------------------------------------
def convert_chunk_landtable(landtable, params):
	result = LandTable(LandTableFormat.SA1)
	visited = {}

	for col in landtable.cols:
		attach = col.get_attach()
		if not isinstance(attach, ChunkAttach):
			result.cols.append(col)
			continue

		if id(attach) not in visited:
			visited[id(attach)] = chunk_to_basic(attach, params)

		newcol = COL(surface_flags=col.surface_flags, bounds=col.bounds)
		newcol.model = Model(col.model.name, visited[id(attach)])
		newcol.model.copy_transform(col.model)
		result.cols.append(newcol)

	print_debug_message(params, F"Converted {len(visited)} chunk attaches into {len(result.cols)} entries")
	return result


# -------------------------------------------------------------------------------------------------
def convert_landtable(landtable, params={}, generator=None):
	"""
	Converts a whole landtable to the other attach format.

	Args:
	- landtable (LandTable): the source, left untouched.
	- params (dict): conversion parameters, only `debug` is used.
	- generator: optional strip generator for basic to chunk conversions.

	Returns:
	- LandTable: a new landtable in the target format, without animations.
	"""
	params = {'debug': False} | params
	if landtable.format is LandTableFormat.SA1:
		result = convert_basic_landtable(landtable, params, generator)
	else:
		result = convert_chunk_landtable(landtable, params)
	result.anims = []
	return result
