from early_model import EarlyDomain, EarlyMember, EarlyTopology
from early_transform_pipeline import default_early_transforms, run_early_transform_pipeline
from early_model_transforms.assign_encodings_transform import AssignEncodingsTransform
from early_model_transforms.flatten_groups_transform import FlattenGroupsTransform
from tests.test_utils import topo_path
from topo_file_loader import load_topo_file


class RecordingTransform:
    def __init__(self, calls, name):
        self.calls = calls
        self.name = name

    def transform(self, model):
        self.calls.append(self.name)
        return model


def test_transforms_run_in_order():
    calls = []
    model = EarlyTopology("t.topo", [])
    result = run_early_transform_pipeline(model, [RecordingTransform(calls, "a"), RecordingTransform(calls, "b")])
    assert result is model
    assert calls == ["a", "b"]


def test_default_transforms():
    transforms = default_early_transforms()
    assert [type(t) for t in transforms] == [FlattenGroupsTransform, AssignEncodingsTransform]


def test_default_pipeline_flattens_and_assigns():
    early = run_early_transform_pipeline(load_topo_file(topo_path("pinmux.topo")), default_early_transforms())
    assert all(isinstance(item, EarlyDomain) for item in early.items)
    insel = early.items[1]
    assert (insel.category, insel.name) == ("pinmux", "insel")
    assert [m.value for m in insel.members] == [0, 1, 2, 3, 4]


def test_empty_pipeline_is_identity():
    model = EarlyTopology("t.topo", [EarlyDomain("d", [EarlyMember("a", None, "t.topo", 2)], "t.topo", 1)])
    assert run_early_transform_pipeline(model, []) is model


def test_verbose_reports_each_transform(capsys):
    model = EarlyTopology("t.topo", [])
    run_early_transform_pipeline(model, default_early_transforms(), verbose=True)
    err = capsys.readouterr().err
    assert "[DEBUG] FlattenGroupsTransform: 0 top-level items" in err
    assert "[DEBUG] AssignEncodingsTransform: 0 top-level items" in err
