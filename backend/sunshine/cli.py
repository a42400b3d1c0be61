"""CLI 命令列工具

提供天氣同步、資料庫初始化、預報查詢與偏好設定等命令列功能。
"""

import asyncio
import logging

import click

from sunshine.config import settings
from sunshine.data.contract import WeatherContract
from sunshine.data.repository import WeatherRepository
from sunshine.database import SessionLocal, init_db
from sunshine.services.weather_sync import WeatherSyncService
from sunshine.settings import OptionKind, SettingsScreen, load_options, open_preferences
from sunshine.utils.dates import millis_to_date


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="顯示除錯訊息")
@click.pass_context
def cli(ctx, verbose):
    """Sunshine CLI 工具"""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if verbose else logging.INFO,
    )
    # 契約只在啟動時建立一次，再傳給各命令
    ctx.obj = WeatherContract.from_settings(settings)


@cli.command()
def init_database():
    """初始化資料庫表"""
    click.echo("正在初始化資料庫...")
    init_db()
    click.echo("資料庫初始化完成！")


@cli.command()
@click.option("--location", default=None, help="預報地點（預設使用偏好設定）")
@click.pass_obj
def sync(contract, location):
    """從天氣 API 同步預報資料"""
    if location is None:
        preferences = open_preferences(settings.preferences_path)
        location = preferences.get_string("location", settings.forecast_location)

    click.echo(f"正在同步 {location} 的天氣預報...")

    # 確保資料表存在
    init_db()

    with SessionLocal() as db:
        service = WeatherSyncService(db, contract, location=location)
        result = asyncio.run(service.sync_weather())

    click.echo("同步完成！")
    click.echo(f"  取得天數: {result['total_fetched']}")
    click.echo(f"  寫入天數: {result['stored']}")


@cli.command()
@click.pass_obj
def forecast(contract):
    """列出今天以後的天氣預報"""
    init_db()

    with SessionLocal() as db:
        entries = WeatherRepository(db, contract).forecast_from_today()

        if not entries:
            click.echo("目前沒有天氣資料，請先執行 sync")
            return

        for entry in entries:
            click.echo(
                f"{millis_to_date(entry.date).isoformat()}  "
                f"{entry.min_temp:5.1f} ~ {entry.max_temp:5.1f} °C  "
                f"濕度 {entry.humidity:.0f}%  "
                f"{contract.build_weather_uri_with_date(entry.date)}"
            )


@cli.command()
@click.option("--host", default="127.0.0.1", help="監聽位址")
@click.option("--port", default=8000, type=int, help="監聽埠號")
def serve(host, port):
    """啟動 API 服務"""
    import uvicorn

    uvicorn.run("sunshine.main:app", host=host, port=port, log_level="info")


@cli.command()
@click.argument("date", type=int)
@click.pass_obj
def uri(contract, date):
    """顯示指定正規化日期的單日 URI"""
    click.echo(str(contract.build_weather_uri_with_date(date)))


@cli.command(name="settings")
def show_settings():
    """顯示目前的偏好設定摘要"""
    store = open_preferences(settings.preferences_path)
    screen = SettingsScreen(store, load_options())
    screen.create()

    for key, option in screen.options.items():
        summary = screen.summary(key)
        if summary is None:
            summary = "開啟" if store.get_bool(key) else "關閉"
        click.echo(f"{option.title}: {summary}")


@cli.command()
@click.argument("key")
@click.argument("value")
def set_pref(key, value):
    """修改偏好設定"""
    store = open_preferences(settings.preferences_path)
    options = load_options()
    screen = SettingsScreen(
        store,
        options,
        on_change=lambda changed: click.echo(f"已更新 {changed}"),
    )

    option = screen.options.get(key)
    if option is None:
        raise click.BadParameter(f"未知的設定: {key}", param_hint="KEY")

    if option.kind == OptionKind.TOGGLE:
        value = value.lower() in ("1", "true", "yes", "on")

    screen.create()
    screen.start()
    try:
        store.set(key, value)
    finally:
        screen.stop()

    store.save()

    summary = screen.summary(key)
    if summary is not None:
        click.echo(f"{option.title}: {summary}")


if __name__ == "__main__":
    cli()
