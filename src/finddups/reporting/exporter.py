"""Text, CSV and JSON export of duplicate groups."""

import csv
import json
from pathlib import Path

from ..common.constants import GROUP_HEADER
from ..common.logging import get_logger
from ..detector.models import DuplicateGroup

logger = get_logger(__name__)


class ReportExporter:
    """Exports duplicate groups as plain text, CSV or JSON."""

    def format_text(self, groups: list[DuplicateGroup]) -> str:
        """Render groups as a size header followed by one path per line.

        Args:
            groups: List of duplicate groups

        Returns:
            Report text, empty if there are no groups
        """
        lines: list[str] = []
        for group in groups:
            lines.append(GROUP_HEADER.format(size=group.size))
            lines.extend(group.paths)
        return "".join(f"{line}\n" for line in lines)

    def export_text(self, groups: list[DuplicateGroup], output_path: Path) -> None:
        """Write the plain text report to a file.

        Args:
            groups: List of duplicate groups
            output_path: Output file path
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.format_text(groups), encoding="utf-8")
        logger.info(f"Exported {len(groups)} groups to text: {output_path}")

    def export_csv(self, groups: list[DuplicateGroup], output_path: Path) -> None:
        """Export duplicate groups to CSV, one row per file.

        Args:
            groups: List of duplicate groups
            output_path: Output file path
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["group_id", "size", "path", "device_id", "inode_id"])
            for group in groups:
                for file in group.files:
                    writer.writerow([
                        group.group_id,
                        group.size,
                        file.path,
                        file.device_id,
                        file.inode_id,
                    ])

        logger.info(f"Exported {len(groups)} groups to CSV: {output_path}")

    def export_json(self, groups: list[DuplicateGroup], output_path: Path) -> None:
        """Export duplicate groups to JSON.

        Args:
            groups: List of duplicate groups
            output_path: Output file path
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "total_groups": len(groups),
            "total_files": sum(g.count for g in groups),
            "total_wasted_space": sum(g.wasted_size for g in groups),
            "groups": [
                {
                    "group_id": group.group_id,
                    "size": group.size,
                    "count": group.count,
                    "wasted_size": group.wasted_size,
                    "files": [
                        {
                            "path": f.path,
                            "device_id": f.device_id,
                            "inode_id": f.inode_id,
                        }
                        for f in group.files
                    ],
                }
                for group in groups
            ],
        }

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        logger.info(f"Exported {len(groups)} groups to JSON: {output_path}")
