import io
import time

from philosim.config import SimConfig
from philosim.simulation import (
    Fork,
    Philosopher,
    Simulation,
    State,
    current_time_ms,
)


def _lines(out):
    return out.getvalue().splitlines()


def test_current_time_ms_tracks_wall_clock():
    before = int(time.time() * 1000)
    now = current_time_ms()
    after = int(time.time() * 1000)
    assert before - 1 <= now <= after + 1


def test_initial_layout():
    sim = Simulation(SimConfig(3, 100, 10, 10, 2), io.StringIO())
    assert [p.id for p in sim.philosophers] == [1, 2, 3]
    assert [f.id for f in sim.forks] == [1, 2, 3]
    assert all(f.is_available for f in sim.forks)
    assert all(p.state is State.THINKING for p in sim.philosophers)
    assert all(p.num_eaten == 0 and p.last_eat_time == 0 for p in sim.philosophers)
    assert sim.running is True


def test_dataclass_defaults():
    assert Philosopher(4) == Philosopher(4, 0, 0, State.THINKING)
    assert Fork(2).is_available is True


def test_elapsed_is_small_and_nonnegative():
    sim = Simulation(SimConfig(1, 100, 10, 10), io.StringIO())
    assert 0 <= sim.elapsed() < 1000


def test_all_eaten_enough():
    out = io.StringIO()
    sim = Simulation(SimConfig(3, 100, 10, 10, 2), out)
    assert sim.all_eaten_enough() is False
    assert out.getvalue() == ""
    for philo in sim.philosophers:
        philo.num_eaten = 2
    assert sim.all_eaten_enough() is True
    assert out.getvalue() == "here - 3\n"


def test_single_philosopher_dies_holding_one_fork():
    out = io.StringIO()
    sim = Simulation(SimConfig(1, 100, 50, 50), out)
    sim.run()
    lines = _lines(out)
    assert lines[0].endswith(" 1 has taken a fork")
    stamp, pid, word = lines[-1].split()
    assert (pid, word) == ("1", "died")
    assert int(stamp) >= 100
    assert sim.philosophers[0].state is State.DEAD
    assert sim.running is False
    assert sim.forks[0].is_available is True


def test_starving_neighbour_dies_while_other_eats():
    out = io.StringIO()
    sim = Simulation(SimConfig(2, 50, 100, 10), out)
    sim.run()
    lines = _lines(out)
    stamp, pid, word = lines[-1].split()
    assert (pid, word) == ("2", "died")
    assert int(stamp) > 50
    assert any(line.endswith(" 1 is eating") for line in lines)
    assert sim.philosophers[1].state is State.DEAD


def test_stops_when_everyone_has_eaten():
    out = io.StringIO()
    sim = Simulation(SimConfig(2, 400, 20, 20, 1), out)
    sim.run()
    text = out.getvalue()
    assert "here - 2" in text
    assert "died" not in text
    assert all(p.num_eaten >= 1 for p in sim.philosophers)
    assert sim.running is False


def test_neighbours_never_eat_at_the_same_time():
    out = io.StringIO()
    sim = Simulation(SimConfig(3, 600, 30, 10, 1), out)
    sim.run()
    eating = [line.split()[1] for line in _lines(out) if line.endswith("is eating")]
    assert sorted(set(eating)) == ["1", "2", "3"]
    assert "died" not in out.getvalue()