from early_model import EarlyTopology
from model_debug import dump_early_topology, dump_topology
from tests.test_utils import load_fixture_model, topo_path
from topo_file_loader import load_topo_file


def test_early_dump_shows_groups_and_auto_values():
    early = load_topo_file(topo_path("pinmux.topo"))
    text = dump_early_topology(early)
    assert text.splitlines()[0] == "EarlyTopology (file: pinmux.topo)"
    assert "  Group: pinmux" in text
    assert "    Domain: insel" in text
    assert "Member: ioa0 = AUTO" in text
    assert "Member: constant_zero = 0" in text
    assert "alias='pinmux_pad_t'" in text


def test_model_dump_shows_resolved_values():
    text = dump_topology(load_fixture_model("pinmux.topo"))
    assert text.splitlines()[0] == "TopologyModel (file: pinmux.topo, domains: 5)"
    assert "  Domain: pinmux_insel (bits=8, base=0, alias='pinmux_insel_t')" in text
    assert "    Member: ioa0 = 2" in text
    assert "reserved=[2]" in text
    assert "unknown=65535" in text


def test_empty_topology_dump():
    assert dump_early_topology(EarlyTopology("empty.topo", [])) == "EarlyTopology (file: empty.topo)"
