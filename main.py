import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from zoomclient import ZoomAPI
from zoomclient.config import ZoomSettings, get_config_by_account, load_config_from_file
from zoomclient.logger import setup_logger
from zoomclient.models import Err, PagedResult
from zoomclient.utils import parse_range_bound

console = Console()


def common_options(f):
    """Общие опции для всех команд"""
    f = click.option('--account', type=str, help='Метка аккаунта из файла конфигурации')(f)
    f = click.option(
        '--config-file', type=str, default=None, help='JSON файл с аккаунтами (по умолчанию ZOOM_CONFIG_FILE)'
    )(f)
    return f


def date_options(f):
    """Опции диапазона дат"""
    f = click.option(
        '--from',
        'from_date',
        type=str,
        help='Дата начала (YYYY-MM-DD, DD-MM-YYYY, DD/MM/YYYY, DD-MM-YY, DD/MM/YY)',
    )(f)
    f = click.option(
        '--to',
        'to_date',
        type=str,
        help='Дата окончания (YYYY-MM-DD, DD-MM-YYYY, DD/MM/YYYY, DD-MM-YY, DD/MM/YY)',
    )(f)
    f = click.option('--last', type=int, help='Последние N дней')(f)
    return f


@click.group()
@click.option('--log-level', type=str, default=None, help='Уровень логирования (по умолчанию LOG_LEVEL)')
@click.pass_context
def cli(ctx, log_level):
    """Zoom Client - работа с Zoom API из командной строки"""
    ctx.ensure_object(dict)
    if log_level:
        setup_logger(log_level=log_level)


def main():
    """Точка входа в приложение"""
    cli()


def _get_client(ctx, account: str | None, config_file: str | None) -> ZoomAPI:
    """Клиент из ctx.obj (тесты), из файла аккаунтов или из переменных ZOOM_*."""
    client = ctx.obj.get("client")
    if client is not None:
        return client

    settings = ZoomSettings()
    if account:
        configs = load_config_from_file(config_file or settings.config_file or "config/zoom_creds.json")
        try:
            config = get_config_by_account(account, configs)
        except ValueError as e:
            raise click.ClickException(str(e)) from e
        client = ZoomAPI(config, settings=settings)
    else:
        client = ZoomAPI.from_settings(settings)

    ctx.obj["client"] = client
    ctx.call_on_close(client.close)
    return client


def _parse_dates(from_date, to_date, last) -> tuple[datetime | None, datetime | None]:
    """Парсинг дат для команд"""
    if from_date and last is not None:
        raise click.UsageError("--from и --last нельзя использовать вместе")
    if to_date and not from_date:
        raise click.UsageError("--to указывается только вместе с --from")

    try:
        if from_date:
            return parse_range_bound(from_date), parse_range_bound(to_date, end_of_day=True) if to_date else None
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    if last is not None:
        now = datetime.now(UTC)
        return now - timedelta(days=last), now

    return None, None


def _fail(operation: str, error: Err):
    console.print(f"[red]❌ {operation}: {error}[/red]")
    sys.exit(1)


def _warn_partial(result: PagedResult):
    if not result.is_complete:
        console.print(
            f"[yellow]⚠️ Получено страниц: {result.pages}, дальше ошибка: {result.error}[/yellow]"
        )


@cli.command()
@click.argument('user_id', default='me')
@common_options
@click.pass_context
def user(ctx, user_id, account, config_file):
    """Показать пользователя (id, email или me)"""
    result = _get_client(ctx, account, config_file).get_user(user_id)
    if isinstance(result, Err):
        _fail("get_user", result)

    found = result.value
    table = Table(title=f"Пользователь {user_id}", show_header=False)
    for field in ("id", "email", "first_name", "last_name", "type", "status", "timezone", "account_id"):
        table.add_row(field, str(getattr(found, field) or ""))
    console.print(table)


@cli.command()
@click.option('--status', type=click.Choice(['active', 'inactive', 'pending']), default='active')
@common_options
@click.pass_context
def users(ctx, status, account, config_file):
    """Список пользователей аккаунта"""
    result = _get_client(ctx, account, config_file).get_users(status)

    table = Table(title=f"Пользователи ({status}): {len(result)}")
    table.add_column("ID")
    table.add_column("Email")
    table.add_column("Имя")
    table.add_column("Тип", justify="right")
    for item in result:
        name = " ".join(part for part in (item.first_name, item.last_name) if part)
        table.add_row(item.id, item.email or "", name, str(item.type or ""))
    console.print(table)
    _warn_partial(result)


@cli.command()
@click.argument('user_id', default='me')
@click.option('--type', 'meeting_type', type=str, default='upcoming', help='scheduled, live, upcoming, ...')
@common_options
@click.pass_context
def meetings(ctx, user_id, meeting_type, account, config_file):
    """Встречи пользователя"""
    result = _get_client(ctx, account, config_file).get_meetings_for_user(user_id, meeting_type)

    table = Table(title=f"Встречи {user_id} ({meeting_type}): {len(result)}")
    table.add_column("ID", justify="right")
    table.add_column("Тема")
    table.add_column("Начало")
    table.add_column("Мин.", justify="right")
    for meeting in result:
        table.add_row(str(meeting.id or ""), meeting.topic or "", meeting.start_time or "", str(meeting.duration or ""))
    console.print(table)
    _warn_partial(result)


@cli.command()
@click.option('--user', 'user_id', type=str, help='Записи пользователя (по умолчанию - всего аккаунта)')
@click.option('--account-id', type=str, default='me', help='ID аккаунта для записей всего аккаунта')
@date_options
@common_options
@click.pass_context
def recordings(ctx, user_id, account_id, from_date, to_date, last, account, config_file):
    """Облачные записи пользователя или аккаунта"""
    date_from, date_to = _parse_dates(from_date, to_date, last)
    client = _get_client(ctx, account, config_file)

    if user_id:
        result = client.get_cloud_recordings_for_user(user_id, date_from, date_to)
    else:
        result = client.get_cloud_recordings_for_account(account_id, date_from, date_to)

    table = Table(title=f"Облачные записи: {len(result)}")
    table.add_column("UUID")
    table.add_column("Тема")
    table.add_column("Начало")
    table.add_column("Файлы", justify="right")
    for meeting in result:
        table.add_row(meeting.uuid or "", meeting.topic or "", meeting.start_time or "", str(len(meeting.recording_files)))
    console.print(table)
    _warn_partial(result)


@cli.command()
@click.argument('url')
@click.argument('output', type=click.Path(dir_okay=False, path_type=Path))
@click.option('--in-memory', is_flag=True, help='Скачать в память, затем записать файл')
@common_options
@click.pass_context
def download(ctx, url, output, in_memory, account, config_file):
    """Скачать файл облачной записи"""
    client = _get_client(ctx, account, config_file)

    if in_memory:
        result = client.download_recording(url)
        if isinstance(result, Err):
            _fail("download_recording", result)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(result.value)
    else:
        result = client.download_recording_stream(url, output)
        if isinstance(result, Err):
            _fail("download_recording_stream", result)

    console.print(f"[green]✅ Сохранено: {output}[/green]")


@cli.command('delete-meeting')
@click.argument('meeting_id')
@click.option('--occurrence', 'occurrence_id', type=str, help='Удалить только это повторение')
@click.option('--remind', is_flag=True, help='Уведомить хостов об удалении')
@common_options
@click.pass_context
def delete_meeting(ctx, meeting_id, occurrence_id, remind, account, config_file):
    """Удалить встречу"""
    result = _get_client(ctx, account, config_file).delete_meeting(meeting_id, occurrence_id, remind)
    if isinstance(result, Err):
        _fail("delete_meeting", result)
    console.print(f"[green]✅ Встреча {meeting_id} удалена[/green]")


@cli.command('plan-usage')
@common_options
@click.pass_context
def plan_usage(ctx, account, config_file):
    """Использование тарифного плана аккаунта"""
    result = _get_client(ctx, account, config_file).get_plan_usage()
    if isinstance(result, Err):
        _fail("get_plan_usage", result)

    usage = result.value
    table = Table(title="Тарифные планы")
    table.add_column("План")
    table.add_column("Хосты", justify="right")
    table.add_column("Использовано", justify="right")
    for detail in usage.plan_base:
        table.add_row(detail.type or "", str(detail.hosts or 0), str(detail.usage or 0))
    console.print(table)
    console.print(f"Лицензированных хостов: {usage.licensed_hosts}")
    if usage.plan_recording:
        console.print(
            f"Облачное хранилище: {usage.plan_recording.plan_storage_usage or usage.plan_recording.free_storage_usage} "
            f"из {usage.plan_recording.plan_storage or usage.plan_recording.free_storage}"
        )


@cli.command()
@click.argument('meeting_id')
@common_options
@click.pass_context
def participants(ctx, meeting_id, account, config_file):
    """Отчет об участниках встречи"""
    result = _get_client(ctx, account, config_file).get_participant_report(meeting_id)

    table = Table(title=f"Участники {meeting_id}: {len(result)}")
    table.add_column("Имя")
    table.add_column("Email")
    table.add_column("Вход")
    table.add_column("Выход")
    table.add_column("Сек.", justify="right")
    for participant in result:
        table.add_row(
            participant.name or "",
            participant.user_email or "",
            participant.join_time or "",
            participant.leave_time or "",
            str(participant.duration or 0),
        )
    console.print(table)
    _warn_partial(result)


if __name__ == "__main__":
    main()
