from .errors import ConversionError, DestinationWriteError, SourceDecodeError
from .openpyxl_writer import OpenpyxlSheetWriter, OpenpyxlWorkbook
from .source import open_input, read_batches
from .transcoder import BatchTranscoder, TranscodeResult, transcode, write_batch, write_header

__all__ = [
	"BatchTranscoder",
	"ConversionError",
	"DestinationWriteError",
	"OpenpyxlSheetWriter",
	"OpenpyxlWorkbook",
	"SourceDecodeError",
	"TranscodeResult",
	"open_input",
	"read_batches",
	"transcode",
	"write_batch",
	"write_header",
]

__version__ = "0.1.0"
