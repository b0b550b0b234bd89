# philosim

A simulation of the dining philosophers problem. Each philosopher runs in
its own thread and sits between two forks. A waiter lock decides who may
pick up forks: a philosopher eats only when both of its forks are free and
it has either not eaten yet or has gone more than 80% of the time to die
without a meal. A monitor thread watches for starvation. It ends the
simulation when a philosopher dies. If a meal count is given, the
simulation also ends once everyone has eaten that many times.

## Installation

```
pip install .
```

## Usage

```
philosim <num_philos> <time_die> <time_eat> <time_sleep> [num_must_eat]
```

The same command can be started as `python -m philosim.cli`.

Arguments:

1. number of philosophers,
2. time (in ms) a philosopher can go without eating before dying,
3. time (in ms) spent eating,
4. time (in ms) spent sleeping,
5. optionally, how many times each philosopher must eat before the
   simulation ends.

Each argument must be made of decimal digits, with an optional leading `+`.
It must not be negative and must be no larger than 2147483647. Eating and
sleeping times longer than the time to die are capped at the time to die.

Each event is printed on its own line as
`<milliseconds since start> <philosopher id> <event>`. The events are
`has taken a fork`, `is eating`, `is sleeping`, `is thinking` and `died`:

```
0 1 has taken a fork
0 1 has taken a fork
0 1 is eating
200 1 is sleeping
400 1 is thinking
...
812 3 died
```

When a meal count is given and every philosopher has reached it, the line
`here - <number of philosophers>` is printed and the simulation stops.

A lone philosopher has only one fork. It takes that fork and holds it until
the monitor reports that it has died.

Bad input prints one of these messages, followed by the usage text, and the
command exits with status 1:

- `❌ Not enough arguments.` / `❌ Too many arguments.`
- `❌ Arguments should be numeric.`
- `❌ Arguments can't be negative.`
- `❌ Arguments value is too big.`

## Library use

```python
import sys

from philosim.config import UsageError, parse_args, usage_message
from philosim.simulation import Simulation

try:
    config = parse_args(["5", "800", "200", "200", "7"])
except UsageError as err:
    print(usage_message(err.msg), end="")
else:
    Simulation(config, sys.stdout).run()
```

- `parse_args(args)` takes the arguments without the program name. It
  returns a frozen `SimConfig` with `num_philos`, `time_to_die`,
  `time_to_eat`, `time_to_sleep` and `num_must_eat`. `num_must_eat` is `-1`
  when no meal count is given. On bad input it raises `UsageError`, a
  `ValueError` whose `msg` holds the message.
- `usage_message(msg)` returns the usage text headed by `msg`.
- `Simulation(config, out=None)` writes its event log to `out`. If `out` is
  not given, the log goes to standard output. `run()` blocks until the
  simulation ends. `elapsed()` gives the milliseconds since the simulation
  was created. `philosophers` and `forks` hold the `Philosopher` and `Fork`
  records. Each `Philosopher` has a `State`: `EATING`, `THINKING`,
  `SLEEPING`, `WAITING_FORK` or `DEAD`.
- `current_time_ms()` returns wall-clock time in whole milliseconds.

## Running the tests

```
pip install .[test]
pytest
```