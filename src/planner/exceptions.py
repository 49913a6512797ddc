"""Plannerのカスタム例外定義

リポジトリ層とツールディスパッチャで使用される例外クラスを定義します。
"""


class PlannerError(Exception):
    """Planner基底例外"""

    pass


class NotFoundError(PlannerError):
    """指定IDのプロジェクト/Todoが存在しない"""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} not found: {entity_id}")


class ValidationError(PlannerError):
    """ツール引数が不正"""

    pass


class StoreError(PlannerError):
    """ストアに保存された値が解釈できない"""

    pass
