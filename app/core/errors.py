# app/core/errors.py


class StoreError(Exception):
    """Ошибка БД или драйвера → 500"""


class DeadlineExceeded(StoreError):
    """Операция не уложилась в дедлайн"""


class TaskNotFound(Exception):
    def __init__(self, task_id: int):
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id
