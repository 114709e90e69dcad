from colorama import Fore, Style


# -------------------------------------------------------------------------------------------------
def print_warning_message(message):
	print(F"{Fore.YELLOW}WARNING: {message}{Style.RESET_ALL}")


# -------------------------------------------------------------------------------------------------
def print_error_message(message):
	print(F"{Fore.RED}ERROR: {message}{Style.RESET_ALL}")


# -------------------------------------------------------------------------------------------------
def print_debug_message(params, message):
	if params.get('debug', False):
		print(F"{Fore.CYAN}DEBUG: {Style.RESET_ALL}{message}")


# -------------------------------------------------------------------------------------------------
def describe_context(attach=None, mesh=None):
	"""
	Builds the `attach 'name', mesh 3` suffix used by conversion errors.
	"""
	parts = []
	if attach is not None:
		parts.append(F"attach '{attach}'")
	if mesh is not None:
		parts.append(F"mesh {mesh}")
	return ', '.join(parts)


# -------------------------------------------------------------------------------------------------
class ConversionError(Exception):

	# ---------------------------------------------------------------------------------------------
	def __init__(self, message, attach=None, mesh=None):
		self.message = message
		self.attach = attach
		self.mesh = mesh
		context = describe_context(attach, mesh)
		super().__init__(F"{message} ({context})" if context else message)

	# ---------------------------------------------------------------------------------------------
	def with_context(self, attach=None, mesh=None):
		# keeps the innermost context that was already known
		return type(self)(
			self.message,
			attach=self.attach if self.attach is not None else attach,
			mesh=self.mesh if self.mesh is not None else mesh
		)


# -------------------------------------------------------------------------------------------------
class StripGenerationFailed(ConversionError):
	pass


# -------------------------------------------------------------------------------------------------
class UnexpectedChunkVariant(ConversionError):
	pass
