"""Threaded dining philosophers simulation arbitrated by a waiter lock."""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TextIO

from philosim.config import SimConfig


class State(Enum):
    EATING = auto()
    THINKING = auto()
    SLEEPING = auto()
    WAITING_FORK = auto()
    DEAD = auto()


@dataclass
class Philosopher:
    id: int
    last_eat_time: int = 0
    num_eaten: int = 0
    state: State = State.THINKING


@dataclass
class Fork:
    id: int
    is_available: bool = True
    lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )


def current_time_ms() -> int:
    """Wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def _sleep_ms(ms: float) -> None:
    time.sleep(ms / 1000)


class Simulation:
    """One run of the simulation, writing its event log to ``out``."""

    def __init__(self, config: SimConfig, out: TextIO | None = None) -> None:
        self.config = config
        self.out = out if out is not None else sys.stdout
        self.running = True
        self.forks = [Fork(i + 1) for i in range(config.num_philos)]
        self.philosophers = [Philosopher(i + 1) for i in range(config.num_philos)]
        self._waiter = threading.Lock()
        self._print_lock = threading.Lock()
        self.start_time = current_time_ms()

    def elapsed(self) -> int:
        """Milliseconds since the simulation started."""
        return current_time_ms() - self.start_time

    def _write(self, line: str) -> None:
        self.out.write(line + "\n")
        self.out.flush()

    def _print_state(self, philo: Philosopher, message: str) -> None:
        stamp = self.elapsed()
        with self._print_lock:
            if self.running or philo.state is State.DEAD:
                self._write(f"{stamp} {philo.id} {message}")

    def all_eaten_enough(self) -> bool:
        """True when every philosopher has eaten the required number of meals."""
        must = self.config.num_must_eat
        count = sum(1 for p in self.philosophers if p.num_eaten >= must)
        if count == len(self.philosophers):
            with self._print_lock:
                self._write(f"here - {count}")
            return True
        return False

    def _take_forks(self, philo: Philosopher, left: int, right: int) -> None:
        for index in (left, right):
            fork = self.forks[index]
            fork.lock.acquire()
            fork.is_available = False
            self._print_state(philo, "has taken a fork")

    def _release_forks(self, left: int, right: int) -> None:
        for index in (left, right):
            fork = self.forks[index]
            fork.is_available = True
            fork.lock.release()

    def _hold_single_fork(self, philo: Philosopher, fork: Fork) -> None:
        if not fork.is_available:
            self._waiter.release()
            return
        fork.lock.acquire()
        fork.is_available = False
        self._waiter.release()
        self._print_state(philo, "has taken a fork")
        while self.running:
            _sleep_ms(10)
        with self._waiter:
            fork.is_available = True
        fork.lock.release()

    def _try_eat(self, philo: Philosopher) -> bool:
        left = philo.id - 1
        right = philo.id % self.config.num_philos
        self._waiter.acquire()
        if left == right:
            self._hold_single_fork(philo, self.forks[left])
            return False
        if self.forks[left].is_available and self.forks[right].is_available:
            since_last_meal = self.elapsed() - philo.last_eat_time
            near_starving = since_last_meal > self.config.time_to_die * 0.8
            if philo.num_eaten == 0 or near_starving:
                self._take_forks(philo, left, right)
                philo.last_eat_time = self.elapsed()
                philo.state = State.EATING
                self._waiter.release()
                self._print_state(philo, "is eating")
                _sleep_ms(self.config.time_to_eat)
                with self._waiter:
                    philo.num_eaten += 1
                    if self.config.num_must_eat > 0 and self.all_eaten_enough():
                        self.running = False
                self._release_forks(left, right)
                return True
        self._waiter.release()
        return False

    def _routine(self, philo: Philosopher) -> None:
        while self.running:
            if not self._try_eat(philo):
                _sleep_ms(1)
                continue
            if not self.running:
                return
            philo.state = State.SLEEPING
            self._print_state(philo, "is sleeping")
            _sleep_ms(self.config.time_to_sleep)
            if not self.running:
                return
            philo.state = State.THINKING
            self._print_state(philo, "is thinking")

    def _has_died(self, philo: Philosopher) -> bool:
        with self._waiter:
            now = self.elapsed()
            starving = now - philo.last_eat_time > self.config.time_to_die
            if not (starving and philo.state is not State.EATING):
                return False
            philo.state = State.DEAD
        self._print_state(philo, "died")
        return True

    def _monitor(self) -> None:
        while self.running:
            for philo in self.philosophers:
                if self._has_died(philo):
                    self.running = False
                    return
            if self.config.num_must_eat > 0:
                with self._waiter:
                    if self.all_eaten_enough():
                        self.running = False
                        return
            _sleep_ms(0.1)

    def run(self) -> None:
        """Run all philosopher threads and the monitor until the simulation ends."""
        workers = [
            threading.Thread(target=self._routine, args=(philo,), daemon=True)
            for philo in self.philosophers
        ]
        for worker in workers:
            worker.start()
        monitor = threading.Thread(target=self._monitor, daemon=True)
        monitor.start()
        for worker in workers:
            worker.join()
        monitor.join()