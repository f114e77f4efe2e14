"""
API Routes: Users

POST /users/register - Create an account
POST /users/login    - Exchange credentials for an access token
GET  /users/login    - Current user for a valid token
"""

from fastapi.responses import Response
from pymongo.errors import DuplicateKeyError

from whattowatch.api.errors import ConflictError, UnauthorizedError
from whattowatch.api.middlewares import PrivateRouteMiddleware, ValidateDtoMiddleware
from whattowatch.api.responses import LOGGED_USER_RESPONSE, USER_RESPONSE
from whattowatch.api.routing import Controller, HttpMethod, RequestContext
from whattowatch.api.shaping import shape
from whattowatch.schemas import CreateUserDto, LoginUserDto
from whattowatch.security import Identity, TokenService
from whattowatch.services import UserService


class UserController(Controller):
    def __init__(self, users: UserService, tokens: TokenService):
        super().__init__(prefix="/users", tags=["Users"])
        self.users = users
        self.tokens = tokens

        self.add_route("/register", HttpMethod.POST, self.create, [ValidateDtoMiddleware(CreateUserDto)])
        self.add_route("/login", HttpMethod.POST, self.login, [ValidateDtoMiddleware(LoginUserDto)])
        self.add_route("/login", HttpMethod.GET, self.check_authenticate, [PrivateRouteMiddleware()])

    async def create(self, ctx: RequestContext) -> Response:
        dto: CreateUserDto = ctx.dto
        if await self.users.find_by_email(dto.email):
            raise ConflictError(f"User with email «{dto.email}» exists.", origin="UserController")

        try:
            user = await self.users.create(dto)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration on the unique email index
            raise ConflictError(f"User with email «{dto.email}» exists.", origin="UserController") from None
        return self.created(shape(user, USER_RESPONSE))

    async def login(self, ctx: RequestContext) -> Response:
        user = await self.users.verify(ctx.dto)
        if not user:
            raise UnauthorizedError("Incorrect email or password", origin="UserController")

        token = self.tokens.create_token(Identity(id=str(user.id), email=user.email))
        return self.ok(shape(user, LOGGED_USER_RESPONSE, {"token": token}))

    async def check_authenticate(self, ctx: RequestContext) -> Response:
        user = await self.users.find_by_email(ctx.user.email)
        if not user:
            raise UnauthorizedError("Unauthorized", origin="UserController")
        return self.ok(shape(user, USER_RESPONSE))
