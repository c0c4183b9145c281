import argparse


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("phải là số nguyên >= 1")
    return number


def create_parser():
    """Tạo và cấu hình parser cho các tham số dòng lệnh."""
    parser = argparse.ArgumentParser(
        prog="vide",
        description=(
            "vide – Trợ lý dịch Việt ↔ Đức kèm ghi chú văn hoá và từ vựng liên quan.\n\n"
            "Ví dụ nhanh:\n"
            "  vide \"Xin chào\"\n"
            "  vide -d de-vi \"Guten Morgen\"\n"
            "  vide            (chế độ tương tác)"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument("text", nargs="*", help="Nội dung cần dịch. Bỏ trống để vào chế độ tương tác.")

    # --- Hướng dịch ---
    parser.add_argument(
        "-d",
        "--direction",
        choices=["vi-de", "de-vi"],
        help="Hướng dịch (mặc định lấy từ config.default_direction).",
    )

    # --- Cấu hình Model & retry ---
    model_group = parser.add_argument_group("Cấu hình Model & retry")
    model_group.add_argument("-m", "--model", type=str, help="Chọn model Gemini cho phiên này (ghi đè tạm thời).")
    model_group.add_argument(
        "--max-attempts",
        type=_positive_int,
        metavar="N",
        help="Số lần thử tối đa khi Gemini lỗi tạm thời (mặc định 3).",
    )
    model_group.add_argument(
        "--glossary-size",
        type=_positive_int,
        metavar="N",
        help="Yêu cầu đúng N thuật ngữ liên quan thay vì danh sách theo nội dung ghi chú.",
    )
    model_group.add_argument(
        "--strict-terms",
        action="store_true",
        help="Coi kết quả có từ vựng không khớp với ghi chú là lỗi và thử lại.",
    )

    # --- Đầu ra ---
    model_group.add_argument("--list-models", action="store_true", help="Liệt kê các model Gemini khả dụng rồi thoát.")

    output_group = parser.add_argument_group("Đầu ra")
    output_group.add_argument("--json", action="store_true", help="In kết quả dạng JSON thay vì bảng rich.")
    output_group.add_argument(
        "--lang",
        "--language",
        dest="language",
        type=str,
        choices=["vi", "en"],
        help="Chọn ngôn ngữ giao diện cho phiên này (override tạm thời config.language).",
    )
    output_group.add_argument(
        "--verbose",
        action="store_true",
        help="Hiển thị thêm log chi tiết (debug) khi chạy CLI.",
    )

    return parser
