"""CLI command for listing the books in the corpus index."""

from ambitype.cli.commands._common import config_from_args
from ambitype.exceptions import AmbitypeException
from ambitype.interfaces import PresenterProtocol
from ambitype.presenters import ConsolePresenter
from ambitype.services import CorpusIndexLoader, create_fetcher


def books_command(args, presenter: PresenterProtocol | None = None) -> int:
    """Execute the books subcommand.

    Args:
        args: Parsed command-line arguments
        presenter: Output presenter (console by default)

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = presenter or ConsolePresenter()
    config = config_from_args(args)

    fetcher = create_fetcher(config)
    try:
        entries = CorpusIndexLoader(fetcher, index_path=config.corpus_index_path).load()
    except AmbitypeException as e:
        presenter.show_error(str(e))
        return 1
    finally:
        fetcher.close()

    presenter.show_books(list(entries))
    return 0
