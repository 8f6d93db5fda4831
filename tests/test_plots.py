from matplotlib.collections import PatchCollection
from matplotlib.figure import Figure

from carstats.data.tables import world_totals
from carstats.visuals.io.geometry import Region
from carstats.visuals.plots.choropleth import plot_choropleth, region_value
from carstats.visuals.plots.create_bar_plot import plot_frame
from carstats.visuals.plots.pie import plot_brand_shares

SQUARE = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))


def test_region_value_falls_back_to_source_name():
    region = Region("Czech Republic", "Czechia", (SQUARE,))
    assert region_value(region, {"Czechia": 5}) == 5
    assert region_value(region, {"Czech Republic": 7}) == 7
    assert region_value(region, {}) == 0


def test_plot_choropleth_draws_every_ring():
    regions = {
        "France": Region("France", "France", (SQUARE, SQUARE)),
        "Atlantis": Region("Atlantis", "Atlantis", (SQUARE,)),
    }
    fig = plot_choropleth(regions, {"France": 100, "Germany": 50})
    assert isinstance(fig, Figure)
    collections = [c for c in fig.axes[0].collections if isinstance(c, PatchCollection)]
    assert len(collections) == 1
    assert len(collections[0].get_paths()) == 3
    texts = " ".join(t.get_text() for t in fig.texts)
    assert "Total cars: 150" in texts
    assert "few" in texts and "many" in texts


def test_plot_brand_shares():
    fig = plot_brand_shares(world_totals())
    ax = fig.axes[0]
    assert len(ax.patches) == len(world_totals().brands)


def test_plot_frame(make_animator, swap_series):
    animator = make_animator(swap_series)
    animator.start()
    fig = plot_frame(animator.plan, title="Brands")
    ax = fig.axes[0]
    assert len(ax.patches) == 2
    texts = [t.get_text() for t in fig.texts]
    assert "2019" in texts
    assert "Brands" in texts
