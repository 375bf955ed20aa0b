import time

MIN_SPEED = 1
MAX_SPEED = 100


def interval_ms(speed):
    """Map a 1-100 speed to a 1000-100 ms step interval."""
    if not MIN_SPEED <= speed <= MAX_SPEED:
        raise ValueError(f"Speed must be between {MIN_SPEED} and {MAX_SPEED}, got {speed}")
    return 1000 - speed * 9


class ContinuousRunner:
    """Steps a TuringMachine on a fixed cadence until it halts or is stopped.

    Single-threaded: each tick runs one whole step, then sleeps. stop() may be
    called from on_step to cancel the run.
    """

    def __init__(self, machine, speed=50, sleep=None, on_step=None):
        self.machine = machine
        self.speed = speed
        self.interval = interval_ms(speed) / 1000
        self.sleep = sleep or time.sleep
        self.on_step = on_step
        self.running = False

    def set_speed(self, speed):
        self.interval = interval_ms(speed) / 1000
        self.speed = speed

    def stop(self):
        self.running = False

    def tick(self):
        advanced = self.machine.step()
        if not advanced or self.machine.halted or self.machine.error:
            self.running = False
        if self.on_step is not None:
            self.on_step(self.machine)
        return advanced

    def start(self, max_ticks=None):
        """Run until halted, errored or stopped. Returns the number of ticks."""
        if self.machine.halted:
            return 0
        self.running = True
        ticks = 0
        while self.running:
            self.tick()
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                self.running = False
            if self.running:
                self.sleep(self.interval)
        return ticks
