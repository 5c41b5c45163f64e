"""Bulk import of addresses read from CSV streams or files."""

from __future__ import annotations

import csv
import gzip
import logging
from collections import Counter, deque
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import IO, Any, Optional, TypeVar, Union

from mimirsbrunn.models import Addr, IndexSettings, IndexVisibility

logger = logging.getLogger(__name__)

T = TypeVar("T")

Row = Union[dict[str, str], list[str]]


class AddressImportError(RuntimeError):
    """Raised when the search index cannot be built or published."""


def _attempt(func: Callable[[T], Addr], item: T) -> tuple[Optional[Addr], Optional[Exception]]:
    try:
        return func(item), None
    except Exception as err:  # any conversion failure only drops the address
        return None, err


def _ordered_map(
    func: Callable[[T], Addr], items: Iterable[T], nb_threads: int
) -> Iterator[tuple[Optional[Addr], Optional[Exception]]]:
    """Apply func to items on a pool of threads, keeping the input order."""
    if nb_threads <= 1:
        for item in items:
            yield _attempt(func, item)
        return
    with ThreadPoolExecutor(max_workers=nb_threads) as executor:
        pending: deque[Future] = deque()
        for item in items:
            pending.append(executor.submit(_attempt, func, item))
            if len(pending) >= 2 * nb_threads:
                yield pending.popleft().result()
        while pending:
            yield pending.popleft().result()


def import_addresses(
    rubber: Any,
    nb_threads: int,
    index_settings: IndexSettings,
    dataset: str,
    addresses: Iterable[T],
    into_addr: Callable[[T], Addr],
) -> int:
    """Convert the addresses, index them in a new index and publish it.

    Addresses that fail to convert or have no street name are skipped.
    Returns the number of indexed addresses.
    """
    try:
        index = rubber.make_index(dataset, index_settings)
    except Exception as err:
        raise AddressImportError(
            f"Error occurred when making index {dataset}: {err}"
        ) from err

    logger.info("Add data in elasticsearch db.")
    country_stats: Counter[str] = Counter()

    def valid_addresses() -> Iterator[Addr]:
        for addr, err in _ordered_map(into_addr, addresses, nb_threads):
            if err is not None:
                logger.warning("Address Error ignored: %s", err)
                continue
            if not addr.street.name:
                logger.warning(
                    "Address %s has no street name and has been ignored.", addr.id
                )
                continue
            country = addr.country_codes[0] if addr.country_codes else "other"
            country_stats[country] += 1
            yield addr

    try:
        nb = rubber.bulk_index(index, valid_addresses())
    except Exception as err:
        raise AddressImportError(f"failed to bulk insert: {err}") from err
    logger.info("importing addresses: %s addresses added.", nb)

    try:
        rubber.publish_index(dataset, index, IndexVisibility.PUBLIC)
    except Exception as err:
        raise AddressImportError("Error while publishing the index") from err

    logger.info("Addresses imported per country:")
    for country, count in sorted(
        country_stats.items(), key=lambda item: item[1], reverse=True
    ):
        logger.info("%10s %s", country, count)

    return nb


def _read_rows(
    stream: IO[str], has_headers: bool, parse_row: Callable[[Row], T]
) -> Iterator[T]:
    reader = csv.reader(stream)
    header: Optional[list[str]] = None
    expected_len: Optional[int] = None
    while True:
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as err:
            logger.warning("Impossible to read line, error: %s", err)
            continue
        if not record:
            continue
        if has_headers and header is None:
            header = record
            expected_len = len(record)
            continue
        if expected_len is None:
            expected_len = len(record)
        if len(record) != expected_len:
            logger.warning(
                "Impossible to read line, error: found record with %d fields, "
                "but the previous record has %d fields",
                len(record),
                expected_len,
            )
            continue
        row: Row = dict(zip(header, record)) if header is not None else record
        try:
            yield parse_row(row)
        except (ValueError, KeyError, IndexError, TypeError) as err:
            logger.warning("Impossible to read line, error: %s", err)


def import_addresses_from_streams(
    rubber: Any,
    has_headers: bool,
    nb_threads: int,
    index_settings: IndexSettings,
    dataset: str,
    streams: Iterable[IO[str]],
    parse_row: Callable[[Row], T],
    into_addr: Callable[[T], Addr],
) -> int:
    """Import the addresses of CSV text streams.

    With headers, parse_row receives a dict per line, otherwise a list.
    Lines that cannot be read or parsed are skipped.
    """
    rows = (
        parsed
        for stream in streams
        for parsed in _read_rows(stream, has_headers, parse_row)
    )
    return import_addresses(
        rubber, nb_threads, index_settings, dataset, rows, into_addr
    )


def _open_files(files: Iterable[Union[str, Path]]) -> Iterator[IO[str]]:
    for raw_path in files:
        path = Path(raw_path)
        logger.info("importing %s...", path)
        try:
            if path.suffix == ".gz":
                stream = gzip.open(path, "rt", newline="", encoding="utf-8")
            else:
                stream = open(path, newline="", encoding="utf-8")
        except OSError as err:
            logger.error("Impossible to read file %s, error: %s", path, err)
            continue
        with stream:
            yield stream


def import_addresses_from_files(
    rubber: Any,
    has_headers: bool,
    nb_threads: int,
    index_settings: IndexSettings,
    dataset: str,
    files: Iterable[Union[str, Path]],
    parse_row: Callable[[Row], T],
    into_addr: Callable[[T], Addr],
) -> int:
    """Import the addresses of CSV files, gzipped when they end in '.gz'.

    Files that cannot be opened are skipped.
    """
    return import_addresses_from_streams(
        rubber,
        has_headers,
        nb_threads,
        index_settings,
        dataset,
        _open_files(files),
        parse_row,
        into_addr,
    )