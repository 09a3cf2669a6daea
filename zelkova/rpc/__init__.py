"""JSON-RPC 2.0 messages, a Unix-socket server and a client."""