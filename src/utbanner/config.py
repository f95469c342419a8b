# src/utbanner/config.py

BANNER_MARKER = "//UT Coverage"
BANNER_TEMPLATE = BANNER_MARKER + ": {percent}%, {covered}/{total}"

# Test sources only need "enough" coverage, everything else needs more until full.
TEST_FILE_SUFFIX = "_test.cpp"
ENOUGH_SUFFIX = ", ENOUGH"
NEED_MORE_SUFFIX = ", NEED_MORE"

# Start of a human-written note kept after the generated banner.
ANNOTATION_START = " ("

BINARY_EXTENSIONS = (".dll", ".exe")

DEFAULT_ENCODING = "utf-8"
DEFAULT_IGNORE_FILE = ".bannerignore"

NOT_READ_YET = "<not read yet>"
DIAGNOSTIC_RECORD = "Exception {error} while processing {path} {covered}/{total}, fl={fragment}"
