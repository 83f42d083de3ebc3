from dependency_injector import containers, providers

from chainhistory.config import Settings
from chainhistory.db.session import build_engine, build_session_factory
from chainhistory.indexer.block_processor import BlockProcessor
from chainhistory.parser.utils.fees import EventFeeCalculator
from chainhistory.parser.utils.multilocation import MultilocationResolver, load_location_table


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    location_table = providers.Singleton(
        load_location_table,
        path=settings.provided.multilocation_table_path,
    )

    multilocation_resolver = providers.Singleton(
        MultilocationResolver,
        table=location_table,
        native_asset_id=settings.provided.native_asset_id,
    )

    fee_calculator = providers.Singleton(EventFeeCalculator)

    # One processor per session; the caller owns the session lifetime
    block_processor = providers.Factory(
        BlockProcessor,
        resolver=multilocation_resolver,
        fee_calculator=fee_calculator,
        native_asset_id=settings.provided.native_asset_id,
        max_call_depth=settings.provided.max_call_depth,
    )
