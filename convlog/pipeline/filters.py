"""Keep only records where the turn changed the selected article."""
from typing import Iterable, Iterator

from convlog.utils.schemas import Record


def accept_record(record: Record) -> bool:
    # An article got selected, either automatically or by the user
    selected = record.output_context_data_selected_article_id
    return bool(selected) and selected != record.context_data_selected_article_id


def filter_records(records: Iterable[Record]) -> Iterator[Record]:
    return (r for r in records if accept_record(r))
