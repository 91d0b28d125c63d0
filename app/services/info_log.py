"""Обработка изменений заявок InfoLog."""
import logging
from typing import NamedTuple, Optional

from app.models.info_log import InfoLog
from app.repositories.info_log import InfoLogRepository
from app.services.provisioner import MemberProvisioner, ProvisionResult

logger = logging.getLogger(__name__)


class InfoLogUpdateResult(NamedTuple):
    """Результат обновления заявки."""
    log: InfoLog
    provisioning: Optional[ProvisionResult]  # None, если создание участника не запускалось


class InfoLogService:
    """Сервис обновления заявок с автоматическим созданием участника."""

    def __init__(self, logs: InfoLogRepository, provisioner: MemberProvisioner):
        self.logs = logs
        self.provisioner = provisioner

    def on_info_log_updated(self, log_id: int, fields: dict) -> Optional[InfoLogUpdateResult]:
        """
        Сохранить изменения заявки и, если передан непустой house_group,
        один раз запустить создание участника.

        Результат создания участника не откатывает обновление заявки.
        Возвращает None, если заявка не найдена.
        """
        log = self.logs.update(log_id, fields)
        if log is None:
            return None
        logger.info(f"Обновлена заявка {log_id}: {sorted(fields)}")

        if not fields.get("house_group"):
            return InfoLogUpdateResult(log=log, provisioning=None)

        # Перечитываем заявку после сохранения
        log = self.logs.find_by_id(log_id)
        if log is None:
            return None
        result = self.provisioner.provision(log)
        logger.info(f"Создание участника по заявке {log_id}: {result.outcome.value}")
        return InfoLogUpdateResult(log=log, provisioning=result)
