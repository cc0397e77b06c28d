import importlib

from loguru import logger
from tree_sitter import Language, Parser, Query

from module_resolver.core import constants as cs
from module_resolver.core import logs as ls
from module_resolver.data_models.models import LanguageSpec
from module_resolver.data_models.types_defs import (
    LanguageImport,
    LanguageLoader,
    LanguageQueries,
)

from . import exceptions as ex
from .language_spec import LANGUAGE_SPECS


def _try_import_language(module_path: str, attr_name: str) -> LanguageLoader:
    """Tries to import a language loader from an installed grammar package.

    Args:
        module_path (str): The Python module path (e.g., 'tree_sitter_javascript').
        attr_name (str): The attribute name for the language loader function.

    Returns:
        LanguageLoader: The language loader function, or None if it is unavailable.
    """
    try:
        logger.debug(ls.IMPORTING_MODULE.format(module=module_path))
        module = importlib.import_module(module_path)
        loader: LanguageLoader = getattr(module, attr_name)
        return loader
    except (ImportError, AttributeError):
        return None


def _import_language_loaders() -> dict[cs.SupportedLanguage, LanguageLoader]:
    """Imports the loaders of every configured grammar.

    Returns:
        dict[cs.SupportedLanguage, LanguageLoader]: A dictionary mapping language
            names to their loader functions (None when not installed).
    """
    language_imports = [
        LanguageImport(lang_key, spec.module_path, spec.attr_name)
        for lang_key, spec in LANGUAGE_SPECS.items()
    ]
    return {
        lang_import.lang_key: _try_import_language(
            lang_import.module_path, lang_import.attr_name
        )
        for lang_import in language_imports
    }


LANGUAGE_LIBRARIES: dict[cs.SupportedLanguage, LanguageLoader] = (
    _import_language_loaders()
)


def _create_optional_query(language: Language, pattern: str | None) -> Query | None:
    """Creates a tree-sitter Query object if a pattern is provided.

    Args:
        language (Language): The tree-sitter Language object.
        pattern (str | None): The query pattern string.

    Returns:
        Query | None: A Query object, or None if the pattern is empty.
    """
    if not pattern or not pattern.strip():
        return None
    return Query(language, pattern)


def _create_language_queries(
    language: Language, parser: Parser, lang_config: LanguageSpec
) -> LanguageQueries:
    """Creates the call-site and import queries for a language.

    Args:
        language (Language): The tree-sitter Language object.
        parser (Parser): The tree-sitter Parser object.
        lang_config (LanguageSpec): The configuration for the language.

    Returns:
        LanguageQueries: The queries together with the parser that produced them.
    """
    return LanguageQueries(
        calls=_create_optional_query(language, cs.JS_CALL_SITE_QUERY),
        imports=_create_optional_query(language, cs.JS_IMPORT_SOURCE_QUERY),
        config=lang_config,
        language=language,
        parser=parser,
    )


def _process_language(
    lang_name: cs.SupportedLanguage,
    lang_config: LanguageSpec,
    queries: dict[cs.SupportedLanguage, LanguageQueries],
) -> bool:
    """Loads one grammar, creates its parser and builds its queries.

    Args:
        lang_name (cs.SupportedLanguage): The language to process.
        lang_config (LanguageSpec): The configuration for the language.
        queries (dict): The dictionary to store the created queries in.

    Returns:
        bool: True if the language was processed successfully, False otherwise.
    """
    lang_lib = LANGUAGE_LIBRARIES.get(lang_name)
    if not lang_lib:
        logger.debug(ls.LIB_NOT_AVAILABLE.format(lang=lang_name))
        return False

    try:
        lang_obj = lang_lib()
        language = lang_obj if isinstance(lang_obj, Language) else Language(lang_obj)
        parser = Parser(language)
        queries[lang_name] = _create_language_queries(language, parser, lang_config)
        logger.debug(ls.GRAMMAR_LOADED.format(lang=lang_name))
        return True
    except Exception as e:
        logger.warning(ls.GRAMMAR_LOAD_FAILED.format(lang=lang_name, error=e))
        return False


def load_parsers() -> dict[cs.SupportedLanguage, LanguageQueries]:
    """Loads all available tree-sitter parsers and their queries.

    Raises:
        RuntimeError: If no grammar could be loaded at all.

    Returns:
        dict[cs.SupportedLanguage, LanguageQueries]: Queries and parser per language.
    """
    queries: dict[cs.SupportedLanguage, LanguageQueries] = {}
    available_languages: list[cs.SupportedLanguage] = []

    for lang_name, lang_config in LANGUAGE_SPECS.items():
        if _process_language(lang_name, lang_config, queries):
            available_languages.append(lang_name)

    if not available_languages:
        raise RuntimeError(ex.NO_LANGUAGES)

    logger.debug(ls.INITIALIZED_PARSERS.format(languages=", ".join(available_languages)))
    return queries
