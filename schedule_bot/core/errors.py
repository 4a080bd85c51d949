# schedule_bot/core/errors.py


class ScheduleError(Exception):
    """Базовое исключение сервиса расписания."""


class MalformedResponseError(ScheduleError):
    """Ответ API не удалось разобрать как расписание."""


class UpstreamError(ScheduleError):
    """Запрос к API расписания завершился неудачно."""


class NotFoundError(UpstreamError):
    """API ответило не-2xx кодом (сущность не найдена или запрос отклонен)."""


class TransientError(UpstreamError):
    """Сетевая ошибка, таймаут или 5xx от API."""


class InvalidTokenError(ScheduleError):
    """Callback-данные не соответствуют ни одному известному формату."""


class ScheduleFormattingError(ScheduleError):
    """Сбой при сборке текста расписания."""
