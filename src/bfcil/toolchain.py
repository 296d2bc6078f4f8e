from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from .errors import ToolchainError

logger = logging.getLogger(__name__)

ILASM_ENV = 'BFCIL_ILASM'
WINDOWS_ILASM = r'C:\Windows\Microsoft.NET\Framework\v4.0.30319\ilasm.exe'


def find_ilasm(explicit: Optional[str] = None) -> str:
    """
    Locate the ilasm assembler.

    Lookup order: explicit path, $BFCIL_ILASM, `ilasm` on PATH, then the
    .NET Framework 4 default location on Windows.
    """
    for candidate in (explicit, os.environ.get(ILASM_ENV)):
        if candidate:
            resolved = shutil.which(candidate) or (candidate if Path(candidate).is_file() else None)
            if resolved is None:
                raise ToolchainError(message=f"Assembler not found: {candidate}")
            return resolved

    found = shutil.which('ilasm')
    if found:
        return found
    if Path(WINDOWS_ILASM).is_file():
        return WINDOWS_ILASM
    raise ToolchainError(
        message=f"Could not find ilasm. Pass --ilasm or set {ILASM_ENV}."
    )


def _ilasm_command(ilasm: str, il_path: Path, exe_path: Path) -> List[str]:
    return [ilasm, '/exe', f'/output={exe_path}', str(il_path)]


def assemble(il_code: str, base_path: Union[str, Path], *, ilasm: Optional[str] = None,
             keep_il: bool = False) -> Path:
    """
    Write `<base>.il`, run ilasm on it and return the path of `<base>.exe`.

    The intermediate .il file is removed afterwards unless keep_il is set,
    also when ilasm fails.
    """
    base = Path(base_path)
    il_path = base.with_name(base.name + '.il')
    exe_path = base.with_name(base.name + '.exe')

    assembler = find_ilasm(ilasm)
    il_path.write_text(il_code, encoding='ascii')
    cmd = _ilasm_command(assembler, il_path, exe_path)
    logger.info("Running %s", ' '.join(cmd))

    try:
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise ToolchainError(message=f"Failed to launch {assembler}: {e}") from e

        if result.returncode != 0:
            detail = (result.stdout + result.stderr).strip()
            raise ToolchainError(
                message=f"ilasm exited with status {result.returncode}" + (f"\n{detail}" if detail else "")
            )
        logger.debug("ilasm output:\n%s", result.stdout)
    finally:
        if not keep_il:
            il_path.unlink(missing_ok=True)

    return exe_path
