
from .table import TrainingTable, RestrictedTable
