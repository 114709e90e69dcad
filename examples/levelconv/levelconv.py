import sys
import argparse
from pathlib import Path

import colorama

from sa_formats.graphics.landtable import LandTable
from sa_formats.conversion.landtable import convert_landtable
from sa_formats.shared.error import ConversionError, print_error_message


# ------------------------------------------------------------------------------
def get_output_filename(inputfile, landtable):
	# level.sa1lvl.json -> level.sa2lvl.json
	target = landtable.format.get_target().value
	stem = inputfile.name.split('.')[0]
	return inputfile.with_name(F"{stem}.{target}.json")


# ------------------------------------------------------------------------------
def convert(args):
	params = {
		'debug': args.debug,
	}

	inputfile = Path(args.input).resolve()
	if not inputfile.is_file():
		raise Exception('Expected input argument to be a file!')

	landtable = LandTable.from_file(inputfile)
	print(F"Converting '{inputfile.name}' from {landtable.format.name} ({len(landtable.cols)} entries)")

	result = convert_landtable(landtable, params)

	outputfile = Path(args.output).resolve() if args.output else get_output_filename(inputfile, landtable)
	result.to_file(outputfile)
	print(F"Wrote '{outputfile}' as {result.format.name} ({len(result.cols)} entries)")


# ------------------------------------------------------------------------------
if __name__ == '__main__':
	colorama.init()
	parser = argparse.ArgumentParser(description='levelconv converts level geometry between basic and chunk attaches!')
	parser.add_argument('input', metavar='level.sa1lvl.json', type=str, help='landtable to convert')
	parser.add_argument('-o', '--output', metavar='output.json', required=False, type=str, help='output file...')
	parser.add_argument('--debug', action='store_true', help='print conversion details')
	_args = parser.parse_args()
	try:
		convert(_args)
		sys.exit(0)
	except ConversionError as e:
		print_error_message(e)
		sys.exit(1)
	except Exception as e:
		print(e)
		sys.exit(1)
