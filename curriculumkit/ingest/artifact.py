"""Write the assembled curriculum as a single JSON artifact."""

import uuid
from pathlib import Path

from curriculumkit.schemas import Curriculum


def write_curriculum(curriculum: Curriculum, output_path: Path) -> Path:
    """
    Write the curriculum atomically.

    The JSON is written to a temporary file beside the target and moved over
    it, so readers see either the previous artifact or the finished one.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = output_path.with_name(f".{output_path.name}.tmp-{uuid.uuid4().hex}")
    try:
        tmp_path.write_text(curriculum.to_json() + "\n", encoding="utf-8")
        tmp_path.replace(output_path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise

    return output_path
