"""Fixed table of syntax highlighting languages.

A language id stored in a ``Code`` type tag is the index of the language in
:data:`LANGUAGES`. The table is append-only: reordering or removing entries
would change the meaning of ids already written to disk.
"""

from typing import Optional

PLAINTEXT = "plaintext"

LANGUAGES = (
    "1c", "abnf", "accesslog", "actionscript", "ada", "angelscript",
    "apache", "applescript", "arcade", "arduino", "armasm", "asciidoc",
    "aspectj", "autohotkey", "autoit", "avrasm", "awk", "axapta", "bash",
    "basic", "bnf", "brainfuck", "c", "cal", "capnproto", "ceylon", "clean",
    "clojure", "clojure-repl", "cmake", "coffeescript", "coq", "cos", "cpp",
    "crmsh", "crystal", "csharp", "csp", "css", "d", "dart", "delphi",
    "diff", "django", "dns", "dockerfile", "dos", "dsconfig", "dts", "dust",
    "ebnf", "elixir", "elm", "erb", "erlang", "erlang-repl", "excel", "fix",
    "flix", "fortran", "fsharp", "gams", "gauss", "gcode", "gherkin", "glsl",
    "gml", "go", "golo", "gradle", "graphql", "groovy", "haml", "handlebars",
    "haskell", "haxe", "hsp", "http", "hy", "inform7", "ini", "irpf90",
    "isbl", "java", "javascript", "jboss-cli", "json", "julia",
    "julia-repl", "kotlin", "lasso", "latex", "ldif", "leaf", "less", "lisp",
    "livecodeserver", "livescript", "llvm", "lsl", "lua", "makefile",
    "markdown", "mathematica", "matlab", "maxima", "mel", "mercury",
    "mipsasm", "mizar", "mojolicious", "monkey", "moonscript", "n1ql",
    "nestedtext", "nginx", "nim", "nix", "node-repl", "nsis", "objectivec",
    "ocaml", "openscad", "oxygene", "parser3", "perl", "pf", "pgsql", "php",
    "php-template", PLAINTEXT, "pony", "powershell", "processing",
    "profile", "prolog", "properties", "protobuf", "puppet", "purebasic",
    "python", "python-repl", "q", "qml", "r", "reasonml", "rib", "roboconf",
    "routeros", "rsl", "ruby", "ruleslanguage", "rust", "sas", "scala",
    "scheme", "scilab", "scss", "shell", "smali", "smalltalk", "sml", "sqf",
    "sql", "stan", "stata", "step21", "stylus", "subunit", "swift",
    "taggerscript", "tap", "tcl", "thrift", "tp", "twig", "typescript",
    "vala", "vbnet", "vbscript", "vbscript-html", "verilog", "vhdl", "vim",
    "wasm", "wren", "x86asm", "xl", "xml", "xquery", "yaml", "zephir",
)

ALIASES = {
    "c++": "cpp",
    "cc": "cpp",
    "cs": "csharp",
    "c#": "csharp",
    "docker": "dockerfile",
    "golang": "go",
    "html": "xml",
    "js": "javascript",
    "jsx": "javascript",
    "md": "markdown",
    "mk": "makefile",
    "objc": "objectivec",
    "pl": "perl",
    "plain": PLAINTEXT,
    "postgres": "pgsql",
    "ps1": "powershell",
    "py": "python",
    "rb": "ruby",
    "rs": "rust",
    "sh": "bash",
    "text": PLAINTEXT,
    "toml": "ini",
    "ts": "typescript",
    "txt": PLAINTEXT,
    "yml": "yaml",
    "zsh": "bash",
}

_BY_NAME = {name: index for index, name in enumerate(LANGUAGES)}


def find_language(text: str) -> Optional[str]:
    """Return the table entry best matching `text` or ``None``.

    An exact match wins, then a case-insensitive one, then an alias.
    """
    text = text.strip()
    if text in _BY_NAME:
        return text

    lowered = text.lower()
    if lowered in _BY_NAME:
        return lowered

    return ALIASES.get(lowered)


def match_language(text: str) -> Optional[int]:
    """Return the language id for `text`. Matching :data:`PLAINTEXT` counts
    as no match, since plain text is not highlighted.
    """
    name = find_language(text)
    if name is None or name == PLAINTEXT:
        return None
    return _BY_NAME[name]


def language_name(language_id: int) -> Optional[str]:
    """Return the language name for `language_id`, or ``None`` when the id is
    not in the table.
    """
    if 0 <= language_id < len(LANGUAGES):
        return LANGUAGES[language_id]
    return None
