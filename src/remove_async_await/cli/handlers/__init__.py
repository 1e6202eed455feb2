from .fold import handle_fold
from .convert import handle_convert, _convert_single_file, _print_batch_summary
