"""CLI command for printing the opening text of a fresh practice session."""

import random

from ambitype.cli.commands._common import config_from_args
from ambitype.exceptions import AmbitypeException
from ambitype.interfaces import PresenterProtocol
from ambitype.presenters import ConsolePresenter
from ambitype.services import (
    BookTextCache,
    CorpusIndexLoader,
    CorpusSessionStream,
    create_corpus_session_service,
    create_fetcher,
)


def sample_command(args, presenter: PresenterProtocol | None = None) -> int:
    """Execute the sample subcommand.

    Args:
        args: Parsed command-line arguments
        presenter: Output presenter (console by default)

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = presenter or ConsolePresenter()
    config = config_from_args(args)
    rng = random.Random(args.seed) if args.seed is not None else None

    fetcher = create_fetcher(config)
    try:
        if args.book:
            text, title = _sample_book(config, fetcher, args.book, args.chars, rng)
        else:
            service = create_corpus_session_service(config, fetcher=fetcher, rng=rng)
            with service:
                session = service.create_corpus_session(args.chars)
            text, title = session.initial_text, session.entry.display_name
    except AmbitypeException as e:
        presenter.show_error(str(e))
        return 1
    finally:
        fetcher.close()

    presenter.show_info(f"From: {title}")
    presenter.show_text(text)
    return 0


def _sample_book(config, fetcher, book_id: str, chars: int, rng) -> tuple[str, str]:
    entries = CorpusIndexLoader(fetcher, index_path=config.corpus_index_path).load()

    entry = next((e for e in entries if e.id == book_id), None)
    if entry is None:
        raise AmbitypeException(f"No book with id '{book_id}' in the corpus index")

    text = BookTextCache(fetcher, min_chars=config.min_book_chars).load(entry)
    stream = CorpusSessionStream(
        entry,
        text,
        rng=rng,
        tail_guard=config.tail_guard_chars,
        chunk_chars=config.append_chunk_chars,
    )
    return stream.create_initial_buffer(chars), entry.display_name
