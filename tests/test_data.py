import pytest

from genetic_tsp import cli
from genetic_tsp.data import load_instance, random_instance, tour_length

SQUARE_TSP = """NAME: square4
TYPE: TSP
COMMENT: corners of a 10x10 square
DIMENSION: 4
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 0 10
3 10 10
4 10 0
EOF
"""

SQUARE_TOUR = """NAME: square4.opt.tour
TYPE: TOUR
DIMENSION: 4
TOUR_SECTION
1
2
3
4
-1
EOF
"""


@pytest.fixture
def square_file(tmp_path):
    path = tmp_path / "square4.tsp"
    path.write_text(SQUARE_TSP)
    (tmp_path / "square4.opt.tour").write_text(SQUARE_TOUR)
    return path


def test_load_instance(square_file):
    inst = load_instance(square_file)
    assert inst.name == "square4"
    assert inst.optimum == 40.0
    assert inst.node_order == [1, 2, 3, 4]
    mat = inst.distance_mat()
    assert mat.n_units() == 4
    assert mat.get_distance([0, 1, 2, 3]) == 40.0
    assert inst.labels([2, 0, 1, 3]) == [3, 1, 2, 4]


def test_load_instance_without_tour(tmp_path):
    path = tmp_path / "square4.tsp"
    path.write_text(SQUARE_TSP)
    assert load_instance(path).optimum is None


def test_load_missing_instance(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_instance(tmp_path / "nope.tsp")


def test_random_instance():
    inst = random_instance(6, seed=3)
    mat = inst.distance_mat()
    assert mat.n_units() == 6
    tour = [0, 1, 2, 3, 4, 5]
    assert mat.get_distance(tour) == pytest.approx(tour_length(inst.graph, tour))
    assert random_instance(6, seed=3).distance_mat().distances.tolist() == mat.distances.tolist()
    with pytest.raises(ValueError):
        random_instance(0)


def test_cli_random_run(capsys):
    cli.main(["run", "--random", "8", "--generations", "5", "--population-size", "6", "--report-every", "1"])
    out = capsys.readouterr().out
    assert "gen 5:" in out
    assert "best length:" in out


def test_cli_instance_run(capsys, square_file):
    cli.main(["run", "--instance", str(square_file), "--generations", "30", "--population-size", "10"])
    out = capsys.readouterr().out
    assert "best length: 40.00" in out
    assert "gap 0.00%" in out


def test_cli_rejects_non_positive_report_interval(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["run", "--random", "5", "--generations", "2", "--population-size", "4", "--report-every", "0"])
    assert exc.value.code == 2
    captured = capsys.readouterr()
    assert "--report-every" in captured.err
    assert "gen " not in captured.out
