"""CLI 入口模块 - MEXC 合约单次下单命令行接口。"""

import sys
from datetime import datetime
from pathlib import Path

import click

from mexc_trader import __version__
from mexc_trader.config import get_settings
from mexc_trader.pipeline import run_once
from mexc_trader.utils.logging import get_logger, setup_logging


@click.group(invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="显示版本号")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """MEXC Trader - 单次杠杆合约下单工具。

    读取最新价格与可用保证金，计算仓位，提交带止盈止损的开多订单。
    """
    if version:
        click.echo(f"mexc-trader version {__version__}")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="试运行模式，构建订单但不提交",
)
def once(dry_run: bool) -> None:
    """执行单次下单流程。

    拉取价格 → 拉取余额 → 计算仓位 → 构建订单 → 签名提交
    """
    settings = get_settings()
    setup_logging(settings)
    logger = get_logger("mexc_trader.main")

    logger.info(
        "starting_single_run",
        symbol=settings.symbol,
        dry_run=dry_run,
        timestamp=datetime.now().isoformat(),
    )

    try:
        result = run_once(settings, dry_run=dry_run)
    except KeyboardInterrupt:
        logger.info("run_interrupted", message="User interrupted")
        sys.exit(130)
    except Exception as e:
        logger.exception("run_failed", error=str(e))
        sys.exit(1)

    if not result.succeeded:
        logger.error(
            "run_completed",
            state=result.state.value,
            step=result.step,
            error_type=type(result.error).__name__,
            error=str(result.error),
            elapsed_ms=round(result.elapsed_ms, 2),
        )
        click.echo(f"[FAILED] step={result.step} error={result.error}")
        sys.exit(1)

    logger.info(
        "run_completed",
        state=result.state.value,
        price=str(result.price),
        quantity=str(result.quantity),
        dry_run=result.dry_run,
        elapsed_ms=round(result.elapsed_ms, 2),
    )
    if result.dry_run:
        click.echo(f"[DRY-RUN] qty={result.quantity} price={result.price} (not submitted)")
    else:
        click.echo(f"[DONE] Order response: {result.response}")


@cli.command()
def status() -> None:
    """显示配置摘要（不显示密钥）。"""
    settings = get_settings()
    setup_logging(settings)

    click.echo("=" * 50)
    click.echo("MEXC Trader - Status")
    click.echo("=" * 50)
    click.echo()

    # API 配置状态
    click.echo("[API Configuration]")
    key_status = "[OK] Configured" if settings.mexc_api_key else "[--] Not configured"
    secret_status = (
        "[OK] Configured" if settings.mexc_api_secret.get_secret_value() else "[--] Not configured"
    )
    click.echo(f"   API key: {key_status}")
    click.echo(f"   API secret: {secret_status}")
    click.echo(f"   Base URL: {settings.mexc_base_url}")
    click.echo(f"   HTTP timeout: {settings.http_timeout}s")
    click.echo()

    # 交易参数
    click.echo("[Trade Parameters]")
    click.echo(f"   Symbol: {settings.symbol}")
    click.echo(f"   Collateral: {settings.collateral_currency}")
    click.echo(f"   Leverage: {settings.leverage}x (max {settings.max_leverage}x)")
    click.echo(f"   Take profit: {settings.take_profit_ratio * 100}%")
    click.echo(f"   Stop loss: {settings.stop_loss_ratio * 100}%")
    click.echo(f"   Price tick: {settings.price_tick}")
    click.echo(f"   Quantity decimals: {settings.quantity_decimals}")
    click.echo()

    # 日志配置
    click.echo("[Logging]")
    click.echo(f"   Log level: {settings.log_level}")
    click.echo(f"   Log format: {settings.log_format.value}")
    click.echo()

    missing = settings.validate_credentials()
    if missing:
        click.echo("[ERROR] Credentials incomplete, missing:")
        for key in missing:
            click.echo(f"   - {key}")
    else:
        click.echo("[OK] Credentials complete")

    click.echo()
    click.echo("=" * 50)


@cli.command()
def check() -> None:
    """检查系统依赖和配置。"""
    setup_logging()
    logger = get_logger("mexc_trader.main")

    click.echo("Checking system dependencies...")
    click.echo()

    all_ok = True

    # 检查必要的包
    packages = [
        ("pydantic", "Configuration validation"),
        ("pydantic_settings", "Environment settings"),
        ("httpx", "HTTP client"),
        ("structlog", "Structured logging"),
        ("click", "CLI framework"),
    ]

    for pkg_name, desc in packages:
        try:
            __import__(pkg_name)
            click.echo(f"  [OK] {pkg_name} - {desc}")
        except ImportError:
            click.echo(f"  [MISSING] {pkg_name} - {desc}")
            all_ok = False

    click.echo()

    # 检查配置文件
    env_file = Path(".env")
    if env_file.exists():
        click.echo("  [OK] .env configuration file exists")
    else:
        click.echo("  [WARN] .env file not found (using defaults)")

    click.echo()

    if all_ok:
        click.echo("[OK] All dependency checks passed")
    else:
        click.echo("[ERROR] Some dependencies missing. Run: pip install -e .")

    logger.info("dependency_check_completed", all_ok=all_ok)


# 支持 python -m mexc_trader.main 调用
if __name__ == "__main__":
    cli()
