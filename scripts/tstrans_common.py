import os
import logging

from argparse import ArgumentParser, Namespace
from dataclasses import dataclass

from PyLinguist.Helpers.Resources import config_dir
from PyLinguist.LinguistError import ConfigurationError
from PyLinguist.Options import Options
from PyLinguist.TranslationProvider import TranslationProvider
from PyLinguist.TsBatcher import BATCH_POLICIES, BATCH_SCOPES
from PyLinguist.TsTranslator import TsTranslator

@dataclass
class LoggerOptions():
    file_handler: logging.FileHandler|None
    log_path: str

def InitLogger(logfilename: str, debug: bool = False) -> LoggerOptions:
    """ Initialise the logger with a file handler and return the path to the log file """
    log_path = os.path.join(config_dir, f"{logfilename}.log")
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
        logging_level = getattr(logging, level_name, logging.INFO)

    # Create console logger
    try:
        logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)
        logging.info("Initialising log")

    except ValueError:
        logging.basicConfig(format='%(levelname)s: %(message)s', level=logging_level)
        logging.info("Unable to write to utf-8 log, falling back to default encoding")

    if debug:
        logging.debug("Debug logging enabled")

    # Create file handler with the same logging level
    try:
        os.makedirs(config_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8', mode='w')
        file_handler.setLevel(logging_level)
        file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logging.getLogger('').addHandler(file_handler)

    except OSError as e:
        logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create new arg parser with the command line overrides for the run configuration
    """
    parser = ArgumentParser(description=description)
    parser.add_argument('-c', '--config', type=str, default="config.json", help="Path of the JSON run configuration")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    parser.add_argument('-l', '--language', type=str, default=None, help="Name of the target language, e.g. Turkish")
    parser.add_argument('-t', '--tag', type=str, default=None, help="Tag of the target language, e.g. tr_TR")
    parser.add_argument('--batchsize', type=int, default=None, help="Maximum number of phrases (or words) in each request")
    parser.add_argument('--policy', type=str, default=None, choices=BATCH_POLICIES, help="Measure batches by phrase count or word count")
    parser.add_argument('--scope', type=str, default=None, choices=BATCH_SCOPES, help="Batch each context separately or the whole document together")
    parser.add_argument('--provider', type=str, default=None, help="Translation provider to use (OpenAI or Custom Server)")
    parser.add_argument('-m', '--model', type=str, default=None, help="Model to request translations from")
    parser.add_argument('--preview', action='store_true', default=None, help="Log the prompts for each batch without sending them")
    parser.add_argument('--writeback', action='store_true', default=None, help="Write translations back to the translation file")
    return parser

def CreateOptions(args : Namespace) -> Options:
    """
    Load the run configuration and apply command line overrides
    """
    options = Options()
    options.LoadConfigFile(args.config)

    options.update({
        'lang': args.language,
        'lang_postfix': args.tag,
        'api_call_size': args.batchsize,
        'batch_policy': args.policy,
        'batch_scope': args.scope,
        'provider': args.provider,
        'preview': args.preview,
        'write_back_to_ts': args.writeback,
    })

    if args.model:
        options.current_provider_settings['model'] = args.model

    options.Validate()

    return options

def CreateTranslator(options : Options) -> TsTranslator:
    """
    Initialise a translator for the selected provider
    """
    translation_provider = TranslationProvider.get_provider(options)

    if not options.preview and not translation_provider.ValidateSettings():
        logging.error(f"Provider settings are not valid: {translation_provider.validation_message}")
        raise ConfigurationError(f"Invalid settings for provider {options.provider}: {translation_provider.validation_message}")

    logging.info(f"Using translation provider {translation_provider.name}")

    return TsTranslator(options, translation_provider)
