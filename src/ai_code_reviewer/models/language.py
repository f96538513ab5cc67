"""Supported programming languages and the default snippet."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProgrammingLanguage:
    """A language offered by the language selector."""

    id: str
    name: str


SUPPORTED_LANGUAGES: tuple[ProgrammingLanguage, ...] = (
    ProgrammingLanguage("javascript", "JavaScript"),
    ProgrammingLanguage("python", "Python"),
    ProgrammingLanguage("typescript", "TypeScript"),
    ProgrammingLanguage("java", "Java"),
    ProgrammingLanguage("csharp", "C#"),
    ProgrammingLanguage("cpp", "C++"),
    ProgrammingLanguage("go", "Go"),
    ProgrammingLanguage("rust", "Rust"),
    ProgrammingLanguage("ruby", "Ruby"),
    ProgrammingLanguage("php", "PHP"),
    ProgrammingLanguage("swift", "Swift"),
    ProgrammingLanguage("kotlin", "Kotlin"),
    ProgrammingLanguage("sql", "SQL"),
)

DEFAULT_LANGUAGE_ID = SUPPORTED_LANGUAGES[0].id

DEFAULT_SOURCE_TEXT = (
    "function fibonacci(n) {\n"
    "  if (n <= 1) return n;\n"
    "  return fibonacci(n - 1) + fibonacci(n - 2);\n"
    "}\n"
    "\n"
    "// This is inefficient for large n\n"
    "console.log(fibonacci(10));"
)


def get_language(language_id: str) -> ProgrammingLanguage | None:
    """Look up a supported language by id.

    Args:
        language_id: Identifier such as "python"

    Returns:
        The matching language, or None if it is not supported
    """
    for language in SUPPORTED_LANGUAGES:
        if language.id == language_id:
            return language
    return None


def is_supported_language(language_id: str) -> bool:
    """Check whether a language id is in the supported list."""
    return get_language(language_id) is not None
