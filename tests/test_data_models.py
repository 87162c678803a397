import pytest

from loan_payoff.data_models import Compounding, Snapshot


class TestCompounding:
    @pytest.mark.parametrize(
        "label, expected",
        [
            ("daily", Compounding.DAILY),
            ("monthly", Compounding.MONTHLY),
            ("yearly", Compounding.YEARLY),
            (" Monthly ", Compounding.MONTHLY),
            ("YEARLY", Compounding.YEARLY),
        ],
    )
    def test_known_labels(self, label, expected):
        assert Compounding.from_label(label) is expected

    @pytest.mark.parametrize("label", ["weekly", "", "annually", None])
    def test_unknown_labels_fall_back_to_daily(self, label):
        assert Compounding.from_label(label) is Compounding.DAILY

    def test_passes_enum_through(self):
        assert Compounding.from_label(Compounding.YEARLY) is Compounding.YEARLY


class TestSnapshot:
    def test_from_run_formats_and_rounds(self):
        snap = Snapshot.from_run(1000, 12, 2000, 30, interest=10.005000001, days=400)
        assert snap.human_duration == "1 years 1 months 5 days"
        assert snap.interest == 10.01
        assert snap.apr == 12

    def test_is_immutable(self):
        snap = Snapshot.from_run(1000, 12, 2000, 30, interest=0, days=30)
        with pytest.raises(AttributeError):
            snap.interest = 5

    def test_dict_round_trip(self):
        snap = Snapshot.from_run(43524.71, 7.5, 730.99, 30, interest=1234.567, days=2250)
        assert Snapshot.from_dict(snap.to_dict()) == snap

    def test_from_dict_recomputes_duration(self):
        data = Snapshot.from_run(1000, 12, 2000, 30, interest=0, days=30).to_dict()
        data["human_duration"] = "forever"
        assert Snapshot.from_dict(data).human_duration == "1 months 0 days"

    def test_from_dict_missing_field(self):
        with pytest.raises(KeyError):
            Snapshot.from_dict({"amount": 1})
