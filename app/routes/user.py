from flask import g, request
from flask_smorest import Blueprint

from app.dto.common import ApiResponse
from app.schemas.common_schema import EmptyResponseSchema
from app.schemas.user import (
    RegisterFormSchema, RegisterFileSchema, LoginRequestSchema, RefreshTokenRequestSchema,
    ChangePasswordRequestSchema, UpdateAccountRequestSchema, AvatarFileSchema, CoverImageFileSchema,
    UserResponseSchema, AuthTokenResponseSchema, ChannelProfileResponseSchema
)
from app.services.user_service import UserService
from common.decorator.auth_decorators import login_required, login_optional
from common.decorator.rate_limit_decorators import rate_limited

user_blueprint = Blueprint(
    'users',
    __name__,
    url_prefix='/api/v1/users',
    description='회원 인증 / 프로필 API'
)


@user_blueprint.route('/register', methods=['POST'])
@rate_limited('AUTH_RATE_LIMIT', failures_only=True)
@user_blueprint.arguments(RegisterFormSchema, location='form')
@user_blueprint.arguments(RegisterFileSchema, location='files')
@user_blueprint.response(201, UserResponseSchema)
def register(form, files):
    user = UserService.register(
        username=form['username'],
        email=form['email'],
        full_name=form['full_name'],
        password=form['password'],
        avatar=files.get('avatar'),
        cover_image=files.get('cover_image')
    )
    return ApiResponse(201, user, "회원 가입이 완료되었습니다.")


@user_blueprint.route('/login', methods=['POST'])
@rate_limited('AUTH_RATE_LIMIT', failures_only=True)
@user_blueprint.arguments(LoginRequestSchema)
@user_blueprint.response(200, AuthTokenResponseSchema)
def login(data):
    tokens = UserService.login(
        password=data['password'],
        username=data.get('username'),
        email=data.get('email')
    )
    return ApiResponse(200, tokens, "로그인되었습니다.")


@user_blueprint.route('/logout', methods=['POST'])
@login_required
@user_blueprint.response(200, EmptyResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def logout():
    UserService.logout(g.user_id, g.access_token)
    return ApiResponse(200, {}, "로그아웃되었습니다.")


@user_blueprint.route('/refresh-token', methods=['POST'])
@user_blueprint.arguments(RefreshTokenRequestSchema)
@user_blueprint.response(200, AuthTokenResponseSchema)
def refresh_token(data):
    #NOTE: 웹 클라이언트는 쿠키, 모바일은 body 로 전달
    incoming = data.get('refresh_token') or request.cookies.get('refreshToken')
    tokens = UserService.refresh_token(incoming)
    return ApiResponse(200, tokens, "토큰이 재발급되었습니다.")


@user_blueprint.route('/current-user', methods=['GET'])
@login_required
@user_blueprint.response(200, UserResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def current_user():
    return ApiResponse(200, UserService.get_current_user(g.user_id), "현재 사용자 정보입니다.")


@user_blueprint.route('/change-password', methods=['POST'])
@login_required
@user_blueprint.arguments(ChangePasswordRequestSchema)
@user_blueprint.response(200, EmptyResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def change_password(data):
    UserService.change_password(g.user_id, data['old_password'], data['new_password'])
    return ApiResponse(200, {}, "비밀번호가 변경되었습니다.")


@user_blueprint.route('/update-account', methods=['PATCH'])
@login_required
@user_blueprint.arguments(UpdateAccountRequestSchema)
@user_blueprint.response(200, UserResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def update_account(data):
    user = UserService.update_account(g.user_id, data['full_name'], data['email'])
    return ApiResponse(200, user, "계정 정보가 수정되었습니다.")


@user_blueprint.route('/avatar', methods=['PATCH'])
@login_required
@user_blueprint.arguments(AvatarFileSchema, location='files')
@user_blueprint.response(200, UserResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def update_avatar(files):
    user = UserService.update_avatar(g.user_id, files['avatar'])
    return ApiResponse(200, user, "프로필 이미지가 변경되었습니다.")


@user_blueprint.route('/cover-image', methods=['PATCH'])
@login_required
@user_blueprint.arguments(CoverImageFileSchema, location='files')
@user_blueprint.response(200, UserResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def update_cover_image(files):
    user = UserService.update_cover_image(g.user_id, files['cover_image'])
    return ApiResponse(200, user, "커버 이미지가 변경되었습니다.")


@user_blueprint.route('/c/<string:username>', methods=['GET'])
@login_optional
@user_blueprint.response(200, ChannelProfileResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def channel_profile(username):
    profile = UserService.get_channel_profile(username, g.user_id)
    return ApiResponse(200, profile, "채널 정보입니다.")
