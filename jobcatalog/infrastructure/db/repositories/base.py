import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Generic, List, Optional, Sequence, Type, TypeVar, Union

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import SQLModel, and_, or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ....core.exceptions import DatabaseError

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)

Filter = Union[ColumnElement, Dict[str, Any], List[Any], None]
Include = Union[str, Sequence[str], None]


class Repository(Generic[ModelType]):
    """
    Generic repository over one SQLModel table.

    Every mutating call only stages work on the session; nothing is durable
    until the owning unit of work commits.

    Filters are plain values interpreted here:

    # SQLAlchemy clause
    await repo.get(Job.id == 5)

    # Equality filters, a list value means IN
    await repo.get_all({'location_id': 1, 'department_id': [1, 2]})

    # Criteria structure, conditions are ['field', 'value'] or
    # ['field', 'operator', 'value']; dotted paths follow relations
    criteria = {
        'and': [
            ['title', 'like', 'engineer'],
            ['posted_date', 'is_not_null', None],
            {
                'or': [
                    ['location.city', 'Berlin'],
                    ['department.title', 'Engineering']
                ]
            }
        ]
    }

    # Eager loading, names or a comma separated string
    include = ['location', 'department']
    include = 'location, department'
    """

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        self.session = session
        self.model = model

    async def get_all(
        self,
        filter: Filter = None,
        include: Include = None,
        tracked: bool = False,
    ) -> List[ModelType]:
        """
        Get all records matching a filter.

        Args:
            filter: Filter value, None for every row
            include: Relations to load in the same round trip
            tracked: Return the session's own instances so changes to them
                are written on commit. Untracked reads return detached
                copies, even for rows the session already holds.

        Returns:
            List of model instances
        """
        statement = self._build_statement(filter, include)

        try:
            async with self._reader(tracked) as session:
                result = await session.exec(statement)
                rows = list(result.all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to get {self.model.__name__} list: {e}")
            raise DatabaseError(f"Failed to get {self.model.__name__} list: {str(e)}", operation="get_all") from e

        logger.debug(f"Loaded {len(rows)} {self.model.__name__} records (tracked={tracked})")
        return rows

    async def get(
        self,
        filter: Filter,
        include: Include = None,
        tracked: bool = False,
    ) -> Optional[ModelType]:
        """
        Get a single record matching a filter.

        Filters are expected to be unique; when several rows match, any one
        of them is returned.

        Returns:
            Model instance or None if not found
        """
        statement = self._build_statement(filter, include).limit(1)

        try:
            async with self._reader(tracked) as session:
                result = await session.exec(statement)
                obj = result.first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to get {self.model.__name__}: {e}")
            raise DatabaseError(f"Failed to get {self.model.__name__}: {str(e)}", operation="get") from e

        if obj is None:
            logger.debug(f"{self.model.__name__} not found")
        return obj

    async def add(self, entity: ModelType) -> None:
        """Stage an insert; the id is assigned when the unit of work commits."""
        self.session.add(entity)
        logger.debug(f"Staged insert of {self.model.__name__}")

    async def any(self, filter: Filter = None) -> bool:
        """
        Check whether any record matches a filter without loading rows.
        """
        statement = select(self.model.id)
        where_condition = self._build_where(filter)
        if where_condition is not None:
            statement = statement.where(where_condition)
        statement = statement.limit(1)

        try:
            result = await self.session.exec(statement)
            return result.first() is not None
        except SQLAlchemyError as e:
            logger.error(f"Failed to check {self.model.__name__} existence: {e}")
            raise DatabaseError(
                f"Failed to check {self.model.__name__} existence: {str(e)}", operation="any"
            ) from e

    async def remove(self, entity: ModelType) -> None:
        """Stage a delete of a tracked or detached record."""
        if entity not in self.session:
            entity = await self.session.merge(entity)
        await self.session.delete(entity)
        logger.debug(f"Staged delete of {self.model.__name__} with ID: {entity.id}")

    def _build_statement(self, filter: Filter, include: Include):
        statement = select(self.model)

        if include:
            load_options = self._get_load_options(include)
            if load_options:
                statement = statement.options(*load_options)

        where_condition = self._build_where(filter)
        if where_condition is not None:
            statement = statement.where(where_condition)

        return statement

    def _build_where(self, filter: Filter):
        if filter is None:
            return None
        if isinstance(filter, ColumnElement):
            return filter
        if isinstance(filter, list):
            return self._parse_condition(filter)
        if isinstance(filter, dict):
            if 'and' in filter or 'or' in filter:
                return self._parse_criteria(filter)
            conditions = []
            for field, value in filter.items():
                operator = 'in' if isinstance(value, (list, tuple)) else '='
                conditions.append(self._build_path_condition(self.model, field, operator, value))
            return and_(*conditions) if conditions else None
        raise ValueError(f"Unsupported filter type: {type(filter).__name__}")

    @asynccontextmanager
    async def _reader(self, tracked: bool) -> AsyncIterator[AsyncSession]:
        """Session to read through.

        Untracked reads use a throwaway session on the same connection, so
        they see what the unit of work has flushed but never hand out its
        instances. Closing it detaches everything it loaded.
        """
        if tracked:
            yield self.session
            return

        connection = await self.session.connection()
        snapshot = AsyncSession(bind=connection, autoflush=False, expire_on_commit=False)
        try:
            yield snapshot
        finally:
            await snapshot.close()

    def _get_load_options(self, include: Include):
        """Get SQLAlchemy load options for eager loading."""
        if isinstance(include, str):
            include = [part.strip() for part in include.split(',') if part.strip()]

        options = []
        for relation_path in include:
            current_option = None
            current_model = self.model

            for part in relation_path.split('.'):
                current_mapper = inspect(current_model)
                if part not in current_mapper.relationships:
                    raise ValueError(f"Relation '{part}' not found in {current_model.__name__}")

                attribute = getattr(current_model, part)
                if current_option is None:
                    current_option = selectinload(attribute)
                else:
                    current_option = current_option.selectinload(attribute)
                current_model = current_mapper.relationships[part].mapper.class_

            if current_option is not None:
                options.append(current_option)

        return options

    def _build_path_condition(self, model, path: str, operator: str, value: Any):
        """Build a condition for 'field' or a related 'relation.field' path."""
        head, _, rest = path.partition('.')
        mapper = inspect(model)

        if not rest:
            if head not in mapper.columns:
                raise ValueError(f"'{head}' is not a valid field on '{model.__name__}'")
            return self._apply_condition(getattr(model, head), operator, value)

        if head not in mapper.relationships:
            raise ValueError(f"'{head}' is not a valid relation on '{model.__name__}'")

        relationship = mapper.relationships[head]
        inner = self._build_path_condition(relationship.mapper.class_, rest, operator, value)
        attribute = getattr(model, head)
        return attribute.any(inner) if relationship.uselist else attribute.has(inner)

    def _apply_condition(self, column, operator: str, value: Any):
        """Apply condition based on operator."""
        try:
            python_type = column.type.python_type
        except (NotImplementedError, AttributeError):
            python_type = str

        if python_type is bool and isinstance(value, str):
            converted_value = value.lower() in ("true", "1", "yes", "on")
        elif python_type in (int, float) and isinstance(value, str):
            try:
                converted_value = python_type(value)
            except ValueError:
                converted_value = value
        else:
            converted_value = value

        if operator == '=':
            return column == converted_value
        elif operator == '!=':
            return column != converted_value
        elif operator == '>':
            return column > converted_value
        elif operator == '>=':
            return column >= converted_value
        elif operator == '<':
            return column < converted_value
        elif operator == '<=':
            return column <= converted_value
        elif operator == 'like':
            return column.ilike(f"%{converted_value}%")
        elif operator == 'not_like':
            return ~column.ilike(f"%{converted_value}%")
        elif operator == 'in':
            if isinstance(converted_value, (list, tuple)):
                return column.in_(converted_value)
            return column.in_([converted_value])
        elif operator == 'not_in':
            if isinstance(converted_value, (list, tuple)):
                return ~column.in_(converted_value)
            return ~column.in_([converted_value])
        elif operator == 'is_null':
            return column.is_(None)
        elif operator == 'is_not_null':
            return column.is_not(None)
        else:
            raise ValueError(f"Unsupported operator: {operator}")

    def _parse_condition(self, condition: List[Any]):
        """
        Parse ['field', 'value'] (assumes '=') or ['field', 'operator', 'value'].
        """
        if len(condition) == 2:
            field, value = condition
            operator = '='
        elif len(condition) == 3:
            field, operator, value = condition
        else:
            raise ValueError("List condition must have 2 or 3 elements: ['field', 'value'] or ['field', 'operator', 'value']")

        return self._build_path_condition(self.model, field, operator, value)

    def _parse_criteria(self, criteria: Dict[str, Any]):
        """Parse criteria structure recursively."""
        conditions = []

        for key, combine in (('and', and_), ('or', or_)):
            if not criteria.get(key):
                continue

            parsed = []
            for condition in criteria[key]:
                if isinstance(condition, dict) and ('and' in condition or 'or' in condition):
                    parsed.append(self._parse_criteria(condition))
                elif isinstance(condition, ColumnElement):
                    parsed.append(condition)
                else:
                    parsed.append(self._parse_condition(condition))

            parsed = [item for item in parsed if item is not None]
            if parsed:
                conditions.append(combine(*parsed))

        # If both 'and' and 'or' exist at the same level, combine with AND
        if len(conditions) > 1:
            return and_(*conditions)
        elif len(conditions) == 1:
            return conditions[0]
        return None
