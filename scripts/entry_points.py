"""Entry point functions for llm-tstrans command line tools."""

import os
import sys
import logging

# Add the parent directory to the sys path so that modules can be found
base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(base_path)


def llm_tstrans():
    """Entry point for llm-tstrans command."""
    from scripts.tstrans_common import InitLogger, CreateArgParser, CreateOptions, CreateTranslator
    from PyLinguist.Helpers.Localization import initialize_localization
    from PyLinguist.LinguistError import ConfigurationError
    from PyLinguist.Options import Options
    from PyLinguist.TsProject import TsProject

    parser = CreateArgParser("Translates the unfinished messages in a Qt Linguist .ts file using a large language model")
    args = parser.parse_args()

    logger_options = InitLogger("llm-tstrans", args.debug)

    initialize_localization(os.getenv("UI_LANGUAGE"))

    try:
        options : Options = CreateOptions(args)

    except ConfigurationError as e:
        logging.critical(f"Unable to load configuration: {e}")
        sys.exit(1)

    project = TsProject(options)

    result = project.Run(CreateTranslator)

    if result:
        logging.info(f"See {logger_options.log_path} for details")

    sys.exit(result)
