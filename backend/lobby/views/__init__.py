from lobby.views.auth_handlers import login as login
from lobby.views.auth_handlers import register as register
from lobby.views.game_handlers import get_game as get_game
from lobby.views.game_handlers import make_move as make_move
from lobby.views.game_handlers import ranking as ranking
from lobby.views.room_handlers import create_room as create_room
from lobby.views.room_handlers import get_room as get_room
from lobby.views.room_handlers import join_room as join_room
from lobby.views.room_handlers import leave_room as leave_room
from lobby.views.room_handlers import list_open_rooms as list_open_rooms
from lobby.views.room_handlers import my_room as my_room
from lobby.views.room_handlers import request_game as request_game
