"""Plan reporting service for generating JSON and YAML outputs."""

import json

import yaml

from src.models.plan import Plan


class PlanReporter:
    """Generates formatted reports from a Plan.

    Provides static methods for JSON output (machine consumption) and YAML
    output (review in merge requests).
    """

    @staticmethod
    def generate_json_report(plan: Plan) -> str:
        """Generate JSON-formatted plan.

        Args:
            plan: Plan to render.

        Returns:
            str: Pretty-printed JSON string with sorted keys for determinism.
        """
        return json.dumps(plan.to_json(), indent=2, sort_keys=True)

    @staticmethod
    def generate_yaml_report(plan: Plan) -> str:
        """Generate YAML-formatted plan with a summary header.

        Args:
            plan: Plan to render.

        Returns:
            str: YAML string with header comments.

        Example:
            >>> print(PlanReporter.generate_yaml_report(plan))
            # Reverse DNS plan
            # Generated: 2025-12-19T10:30:00+00:00
            # Zones: 1, PTR records: 2, Imports: 0, Errors: 0
            summary:
              ...
        """
        data = plan.to_json()
        summary = data["summary"]
        header = [
            "# Reverse DNS plan",
            f"# Generated: {summary['generated_at']}",
            (
                f"# Zones: {summary['zones']}, PTR records: {summary['ptr_records']}, "
                f"Imports: {summary['imports']}, Errors: {summary['errors']}"
            ),
        ]
        yaml_output = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
        return "\n".join(header) + "\n" + yaml_output
