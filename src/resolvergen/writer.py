from pathlib import Path

from resolvergen import log
from resolvergen.generators.typescript.declarations import CodeFile


def write_code_files(files: list[CodeFile], output_dir: Path) -> list[Path]:
    """
    Write generated units below `output_dir`.

    Units that are not forced are left untouched when they already exist, since they may have been
    edited by hand.

    Args:
        files: The generated units
        output_dir: Directory the unit paths are relative to

    Returns:
        list[Path]: The paths that were written
    """
    written: list[Path] = []

    for code_file in files:
        path = output_dir / code_file.path
        if path.exists() and not code_file.force:
            log.warning(f"Skipping {path}: file already exists")
            continue

        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(code_file.code, encoding="utf-8")
        log.debug(f"Wrote {path}")
        written.append(path)

    return written
