DEFAULT_TAG = "div"

DEFAULT_INDENT = "  "
DEFAULT_NEWLINE = "\n"

NUMBERING_PLACEHOLDER = "$"

# characters allowed in tag, id, class and attribute names besides alphanumerics
IDENTIFIER_PUNCTUATION = frozenset("-_$")

EXAMPLE_ABBREVIATIONS = [
    'ul>li.item$*3',
    'nav>ul>(li>a{Link $})*3',
    'section>h2{Hello}+p{Lorem ipsum dolor sit amet}',
    'form>label[for=email]{Email}+input#email[type=email]',
]

LOG_LEVEL_ENV = "KUMIKI_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

# upper bounds on what one abbreviation may expand to
MAX_ELEMENTS = 10000
MAX_NESTING_DEPTH = 100
