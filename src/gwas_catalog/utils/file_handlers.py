"""
File handlers for GWAS catalog input and report output.
"""

import gzip
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Union

import pandas as pd

logger = logging.getLogger(__name__)


def _strip_terminator(line: str) -> str:
    if line.endswith('\n'):
        line = line[:-1]
        if line.endswith('\r'):
            line = line[:-1]
    return line


def read_lines(file_path: Union[str, Path]) -> List[str]:
    """
    Read every line of a text file into memory.

    Gzip-compressed files (.gz) are decompressed transparently. Lines end
    only at '\\n'; the terminator ('\\n' or '\\r\\n') is removed and a lone
    '\\r' stays part of its field.

    Args:
        file_path: Path to the catalog file

    Returns:
        List of lines in file order
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Catalog file not found: {file_path}")

    opener = gzip.open if file_path.suffix == '.gz' else open

    with opener(file_path, 'rt', encoding='utf-8', newline='\n') as f:
        lines = [_strip_terminator(line) for line in f]

    logger.debug(f"Read {len(lines)} lines from {file_path}")
    return lines


def write_lines(lines: Iterable[str], output_path: Union[str, Path]) -> str:
    """
    Write lines verbatim, each terminated by '\\n'.

    Unlike write_results, no quoting is applied, so a table written from
    read_lines output reads back cell for cell.

    Args:
        lines: Lines without terminators
        output_path: Output file path

    Returns:
        Path to written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8', newline='\n') as f:
        for line in lines:
            f.write(line + '\n')

    logger.info(f"Results written to: {output_path}")
    return str(output_path)


def write_results(
    data: Union[pd.DataFrame, Dict, list],
    output_path: Union[str, Path],
    format: str = 'tsv'
) -> str:
    """
    Write results to file.

    Args:
        data: Data to write (DataFrame, dict, or list)
        output_path: Output file path
        format: Output format ('tsv', 'csv', 'json')

    Returns:
        Path to written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(data, pd.DataFrame):
        if format == 'tsv':
            data.to_csv(output_path, sep='\t', index=False)
        elif format == 'csv':
            data.to_csv(output_path, index=False)
        elif format == 'json':
            data.to_json(output_path, orient='records', indent=2)
        else:
            raise ValueError(f"Unsupported format: {format}")
    else:
        with open(output_path, 'w') as f:
            json.dump(data, f, indent=2, default=str)

    logger.info(f"Results written to: {output_path}")
    return str(output_path)
