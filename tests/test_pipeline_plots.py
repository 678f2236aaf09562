from data_processing.models import TopDiseaseRecord
from data_processing.pipeline import RecordPipeline
from visualization.map_layer import build_point_features
from visualization.plots import (
    plot_climate_factors,
    plot_outbreak_map,
    plot_top_diseases,
    plot_weekly_trend,
)
from visualization.themes import epidash_theme_template
from tests.factories import make_map, make_trend

WEEKS = ["2024-W01", "2024-W02", "2024-W03"]


def test_sum_by_follows_domain_week_order():
    records = (
        make_trend(week="2024-W03", cases=5),
        make_trend(week="2024-W01", cases=10),
        make_trend(state="Goa", week="2024-W01", cases=15),
        make_trend(week="2024-W02", cases=1),
    )
    df = RecordPipeline(records).order_categories('week', WEEKS).sum_by('week').get_df()
    assert list(df['week']) == WEEKS
    assert list(df['cases']) == [25, 1, 5]


def test_empty_pipeline_keeps_requested_columns():
    df = RecordPipeline((), columns=['week', 'cases']).sum_by('week').get_df()
    assert df.empty
    assert list(df.columns) == ['week', 'cases']



def test_csv_export_has_header_and_rows(trend_records):
    csv = RecordPipeline(trend_records).to_csv()
    lines = csv.strip().splitlines()
    assert lines[0] == "week,cases,state,disease"
    assert len(lines) == 1 + len(trend_records)


def _annotations(fig):
    return [a.text for a in fig.layout.annotations]


def test_empty_collections_render_placeholder():
    for fig in (
        plot_weekly_trend((), WEEKS),
        plot_top_diseases((), "Top 5 Diseases - All States"),
        plot_climate_factors((), "Dengue"),
        plot_outbreak_map([]),
    ):
        assert "No data available for the selected filters." in _annotations(fig)


def test_weekly_trend_plots_one_point_per_week(trend_records):
    fig = plot_weekly_trend(trend_records, WEEKS)
    assert [str(week) for week in fig.data[0].x] == ["2024-W01", "2024-W02"]
    assert list(fig.data[0].y) == [420, 335]


def test_outbreak_map_has_one_marker_per_feature():
    features = list(build_point_features([make_map(cases=0), make_map(cases=1000)]))
    fig = plot_outbreak_map(features)
    trace = fig.data[0]
    assert len(trace.lat) == 2
    assert list(trace.marker.size) == [8, 40]
    assert list(trace.marker.color) == ["#ffffcc", "#e31a1c"]


def test_theme_leaves_hover_and_axis_type_to_each_chart(trend_records):
    layout = epidash_theme_template.layout
    assert layout.hovermode is None
    assert layout.xaxis.type is None

    trend = plot_weekly_trend(trend_records, WEEKS)
    assert trend.layout.hovermode == 'x unified'
    assert trend.layout.xaxis.type == 'category'

    pie = plot_top_diseases(
        (TopDiseaseRecord(disease="Dengue", cases=1250, percentage=35),), "Top 5 Diseases - All States")
    assert pie.layout.hovermode is None

    features = list(build_point_features([make_map()]))
    assert plot_outbreak_map(features).layout.hovermode == 'closest'
