from wifistudy.sim.driver import SimulationDriver

__all__ = ["SimulationDriver"]
