from flask_socketio import SocketIO
from flask_compress import Compress

# Initialize extensions
socketio = SocketIO(cors_allowed_origins="*")
compress = Compress()
