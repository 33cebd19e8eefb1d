from mpi4py import MPI

from lightning_nox.reduction import Reducer


class MPIReducer(Reducer):
    """Reductions across the ranks of an MPI communicator.

    Args:
        comm: an MPI Comm object, defaults to ``MPI.COMM_WORLD``
    """

    def __init__(self, comm=None):
        self.comm = comm if comm is not None else MPI.COMM_WORLD

    def sum(self, value: float) -> float:
        return float(self.comm.allreduce(float(value), op=MPI.SUM))

    def max(self, value: float) -> float:
        return float(self.comm.allreduce(float(value), op=MPI.MAX))

    def min(self, value: float) -> float:
        return float(self.comm.allreduce(float(value), op=MPI.MIN))
