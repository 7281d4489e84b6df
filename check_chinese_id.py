import argparse
import datetime
import enum
import logging
import sys
import types
from typing import NamedTuple, Optional

PROVINCES = types.MappingProxyType({
	"11": "Beijing", "12": "Tianjin", "13": "Hebei", "14": "Shanxi", "15": "Inner Mongolia",
	"21": "Liaoning", "22": "Jilin", "23": "Heilongjiang",
	"31": "Shanghai", "32": "Jiangsu", "33": "Zhejiang", "34": "Anhui", "35": "Fujian", "36": "Jiangxi", "37": "Shandong",
	"41": "Henan", "42": "Hubei", "43": "Hunan", "44": "Guangdong", "45": "Guangxi", "46": "Hainan",
	"50": "Chongqing", "51": "Sichuan", "52": "Guizhou", "53": "Yunnan", "54": "Tibet",
	"61": "Shaanxi", "62": "Gansu", "63": "Qinghai", "64": "Ningxia", "65": "Xinjiang",
	"71": "Taiwan",
	"81": "Hong Kong", "82": "Macau",
	"91": "Overseas",
})
REGION_CODES = frozenset(PROVINCES)

WEIGHTS = (7, 9, 10, 5, 8, 4, 2, 1, 6, 3, 7, 9, 10, 5, 8, 4, 2)
# WEIGHTS[i] == 2 ** (17 - i) % 11
PARITY_BITS = "10X98765432"
# indexed by weighted sum % 11

DIGITS = "0123456789"


class Reason(enum.Enum):
	OK = "ok"
	BAD_LENGTH = "invalid length"
	BAD_REGION = "invalid region code"
	BAD_DATE = "invalid birth date"
	NON_DIGIT = "non-digit character"
	BAD_CHECKSUM = "checksum mismatch"


class ValidationResult(NamedTuple):
	valid: bool
	reason: Reason

	def __bool__(self) -> bool:
		return self.valid


def is_digits(s:str) -> bool:
	return all(c in DIGITS for c in s)

def birth_date(id_num:str) -> Optional[datetime.date]:
	"""
	Birth date embedded in a 15 or 18 length id number.
	15 length numbers carry a 2-digit year of the 1900s.
	Return None if it is not a calendar date.
	"""
	birth = "19" + id_num[6:12] if len(id_num) == 15 else id_num[6:14]
	if len(birth) != 8 or not is_digits(birth):
		return None
	try:
		return datetime.date(int(birth[:4]), int(birth[4:6]), int(birth[6:]))
	except ValueError:
		return None

def compute_checksum(body:str) -> str:
	"""
	Check character of the 17 digits body of an 18 length id number.
	Raise ValueError if body is not 17 ascii digits.
	"""
	if len(body) != 17 or not is_digits(body):
		raise ValueError("id body must be 17 digits, got %r" % body)
	S = sum(DIGITS.index(c) * w for c, w in zip(body, WEIGHTS))
	return PARITY_BITS[S % 11]

def validate_china_id(id_num:str) -> ValidationResult:
	if not id_num or len(id_num) not in (15, 18):
		return ValidationResult(False, Reason.BAD_LENGTH)

	if id_num[:2] not in REGION_CODES:
		return ValidationResult(False, Reason.BAD_REGION)

	if birth_date(id_num) is None:
		return ValidationResult(False, Reason.BAD_DATE)

	body = id_num[:17] if len(id_num) == 18 else id_num
	if not is_digits(body):
		return ValidationResult(False, Reason.NON_DIGIT)

	if len(id_num) == 18 and compute_checksum(body) != id_num[17].upper():
		return ValidationResult(False, Reason.BAD_CHECKSUM)
	# 15 length numbers predate the check character

	return ValidationResult(True, Reason.OK)

def check_china_id(id_num:str) -> bool:
	return validate_china_id(id_num).valid

def extract_info(id_num:str) -> Optional[dict]:
	"""
	Decode a valid id number.
	return {region_code, province, birthday, gender, length}, or None if invalid.
	"""
	if not check_china_id(id_num):
		return None
	sequence = id_num[14:17] if len(id_num) == 18 else id_num[12:15]
	return {
		"region_code": id_num[:2],
		"province": PROVINCES[id_num[:2]],
		"birthday": birth_date(id_num),
		"gender": "male" if DIGITS.index(sequence[-1]) % 2 else "female",
		"length": len(id_num),
	}

def main(argv:list=None) -> int:
	parser = argparse.ArgumentParser(prog="check_chinese_id.py", description="Check a Chinese resident ID card number (15 or 18 digits): region code, birth date and checksum.")
	parser.add_argument("ID", nargs="?", type=str, help="ID card number, prompt for it if omitted.")
	parser.add_argument("-i", "--info", action="store_true", help="Show province, birthday and gender of a valid number.")
	parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logs.")
	args = parser.parse_args(argv)

	logging.basicConfig(format="%(levelname)s:%(message)s", level=logging.DEBUG if args.verbose else logging.ERROR, force=True)

	id_num = args.ID
	if id_num is None:
		id_num = input("Please input Chinese ID card number:")
	res = validate_china_id(id_num)
	logging.debug("validate_china_id(%r) -> %s." % (id_num, res.reason.name))

	if not res:
		print("%s is invalid: %s." % (id_num, res.reason.value))
		return 1
	print("%s is valid." % id_num)
	if args.info:
		info = extract_info(id_num)
		print("\tprovince: %s (%s)" % (info["province"], info["region_code"]))
		print("\tbirthday: %s" % info["birthday"].strftime("%Y-%m-%d"))
		print("\tgender: %s" % info["gender"])
	return 0

if __name__ == '__main__':
	sys.exit(main())
