"""Import run orchestration.

Chains ingestion, JSONL export and audit logging for a file or folder.
"""

import sys
import time
from pathlib import Path

from bibimport.audit import AuditLogger, generate_run_id, get_environment_info
from bibimport.engine.config import ImportConfig, ImportResult
from bibimport.models import CanonicalRecord
from bibimport.parse.ingestion import (
    FileIngestionResult,
    IngestionStatus,
    ingest_file,
    ingest_folder,
)
from bibimport.parse.registry import FormatRegistry, default_format_registry


def _run(
    input_path: Path,
    config: ImportConfig,
    formats: FormatRegistry,
    logger: AuditLogger | None,
) -> ImportResult:
    if not input_path.exists():
        return ImportResult(
            success=False,
            total_files=0,
            total_records=0,
            error_message=f"Input path does not exist: {input_path}",
        )

    records: list[CanonicalRecord]
    results: list[FileIngestionResult]
    if input_path.is_file():
        records, result = ingest_file(
            input_path,
            format_name=config.format_name,
            encoding=config.encoding,
            formats=formats,
            audit_logger=logger,
        )
        results = [result]
    else:
        records, report = ingest_folder(
            input_path,
            recursive=config.recursive,
            format_name=config.format_name,
            encoding=config.encoding,
            formats=formats,
            audit_logger=logger,
        )
        results = list(report.file_results)

    failed = [r for r in results if r.status is not IngestionStatus.OK]
    warnings = [f"{r.filename}: {w}" for r in results for w in r.warnings]

    output_files: dict[str, str] = {}
    if config.output_path is not None:
        from bibimport.api import write_jsonl

        config.output_path.parent.mkdir(parents=True, exist_ok=True)
        write_jsonl(records, config.output_path)
        output_files["records"] = str(config.output_path)

    error_message = None
    if failed:
        error_message = "; ".join(f"{r.filename}: {', '.join(r.errors)}" for r in failed[:3])

    return ImportResult(
        success=not (failed and config.strict),
        total_files=len(results),
        total_records=len(records),
        failed_files=[r.filename for r in failed],
        warnings=warnings,
        output_files=output_files,
        error_message=error_message,
    )


def run_import(
    input_path: Path | str,
    config: ImportConfig | None = None,
    formats: FormatRegistry | None = None,
) -> ImportResult:
    """Import a file or folder according to ``config``.

    Parameters
    ----------
    input_path : Path | str
        Path to input file or folder.
    config : ImportConfig | None, optional
        Import configuration. If None, uses defaults.
    formats : FormatRegistry | None, optional
        Registry of import formats, by default the process-wide one.

    Returns
    -------
    ImportResult
        Run summary.

    Examples
    --------
        >>> from bibimport.engine import ImportConfig, run_import
        >>> result = run_import("refs.txt", ImportConfig(output_path="refs.jsonl"))
        >>> result.total_records
        12
    """
    input_path = Path(input_path)
    config = config or ImportConfig()
    if formats is None:
        formats = default_format_registry()

    if config.audit_log_path is None:
        return _run(input_path, config, formats, None)

    start_time = time.perf_counter()
    with AuditLogger(generate_run_id(), config.audit_log_path) as logger:
        logger.run_started(
            command=sys.argv,
            parameters={"config": config.to_dict(), "environment": get_environment_info()},
        )
        result = _run(input_path, config, formats, logger)
        result.output_files["audit_log"] = str(config.audit_log_path)
        logger.run_finished(
            status="success" if result.success else "failed",
            duration_seconds=time.perf_counter() - start_time,
            records_imported=result.total_records,
        )
    return result
