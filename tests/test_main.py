"""
CLI tests - argument wiring for the fetch command
"""

from unittest.mock import patch

from site_activity.extract.errors import FoundationalFetchError
from site_activity.extract.models import SiteActivityQuery
from site_activity.main import main


@patch("site_activity.main.setup_logging")
@patch("site_activity.main.SiteActivityPipeline")
def test_fetch_builds_query_and_prints(pipeline_cls, _setup_logging, capsys):
    pipeline_cls.return_value.run_snapshot.return_value = {"total_returned": 3}

    exit_code = main(
        ["fetch", "--utm-source", "PROJECTSOLAR", "--from-date", "2024-01-01",
         "--no-details", "--active-only"]
    )

    assert exit_code == 0
    pipeline_cls.assert_called_once_with(output_dir="output", dry_run=True)
    pipeline_cls.return_value.run_snapshot.assert_called_once_with(
        SiteActivityQuery(
            utm_source="PROJECTSOLAR", from_date="2024-01-01", include_details=False
        ),
        active_only=True,
    )
    assert '"total_returned": 3' in capsys.readouterr().out


@patch("site_activity.main.setup_logging")
@patch("site_activity.main.SiteActivityPipeline")
def test_fetch_failure_returns_non_zero(pipeline_cls, _setup_logging):
    pipeline_cls.return_value.run_snapshot.side_effect = FoundationalFetchError("down")

    assert main(["fetch", "--utm-source", "X"]) == 1


@patch("site_activity.main.setup_logging")
@patch("site_activity.main.default_date_range", return_value=("2024-05-01", "2024-05-31"))
@patch("site_activity.main.SiteActivityPipeline")
def test_last_days_overrides_dates(pipeline_cls, _range, _setup_logging):
    pipeline_cls.return_value.run_snapshot.return_value = {}

    main(["fetch", "--utm-source", "X", "--last-days", "30", "--save"])

    pipeline_cls.assert_called_once_with(output_dir="output", dry_run=False)
    query = pipeline_cls.return_value.run_snapshot.call_args.args[0]
    assert (query.from_date, query.to_date) == ("2024-05-01", "2024-05-31")
